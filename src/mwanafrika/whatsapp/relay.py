"""Deferred-reply relay: answer a webhook in time, follow up out of band if late.

Per inbound message the relay moves through::

    RECEIVED -> GENERATING -> RESPONDED_SYNC
                           -> RESPONDED_PLACEHOLDER -> FOLLOWUP_SENT
                                                    -> FOLLOWUP_DROPPED

A timeout only stops the *waiting*; the generation task is never cancelled.
Each inbound message gets exactly one generation attempt and at most one
follow-up send. Identical deliveries are not de-duplicated.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

logger = structlog.get_logger()

PLACEHOLDER_REPLY = "Thanks! I’m thinking and will reply shortly."

Generate = Callable[[str], Awaitable[str]]
Send = Callable[[str, str, str], Awaitable[Any]]  # (from_, to, body)


class RelayState(StrEnum):
    """Lifecycle of one inbound message."""

    RECEIVED = "received"
    GENERATING = "generating"
    RESPONDED_SYNC = "responded_sync"
    RESPONDED_PLACEHOLDER = "responded_placeholder"
    FOLLOWUP_SENT = "followup_sent"
    FOLLOWUP_DROPPED = "followup_dropped"


@dataclass
class RelayOutcome:
    """Synchronous result of a relay cycle.

    ``followup`` is the detached task delivering the late answer; it resolves
    to ``FOLLOWUP_SENT`` or ``FOLLOWUP_DROPPED`` and never raises.
    """

    state: RelayState
    reply: str
    followup: "asyncio.Task[RelayState] | None" = None


class DeferredReplyRelay:
    """Race a slow reply generator against a fixed time budget.

    Args:
        generate: Coroutine function producing the reply for an inbound text.
        send: Out-of-band sender used for late replies; None disables follow-ups.
        timeout_s: Seconds to wait before answering with the placeholder.
    """

    def __init__(self, generate: Generate, send: Send | None = None, timeout_s: float = 10.0):
        self._generate = generate
        self._send = send
        self.timeout_s = timeout_s
        # strong references so detached tasks are not garbage collected mid-flight
        self._background: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._background)

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def relay(
        self,
        text: str,
        reply_from: str | None = None,
        reply_to: str | None = None,
    ) -> RelayOutcome:
        """Produce the synchronous reply for one inbound message.

        Args:
            text: Inbound message body.
            reply_from: Address the follow-up is sent from (the channel number).
            reply_to: Address of the original sender.

        Returns:
            RESPONDED_SYNC with the generated text, or RESPONDED_PLACEHOLDER
            with the placeholder and the detached follow-up task.

        Raises:
            Exception: Whatever the generator raised, if it failed in time.
        """
        log = logger.bind(reply_to=reply_to)
        log.debug("relay_state", state=RelayState.RECEIVED)
        generation = self._spawn(self._generate(text))
        log.debug("relay_state", state=RelayState.GENERATING)

        done, _ = await asyncio.wait({generation}, timeout=self.timeout_s)
        if generation in done:
            reply = generation.result()
            log.info("relay_state", state=RelayState.RESPONDED_SYNC)
            return RelayOutcome(state=RelayState.RESPONDED_SYNC, reply=reply)

        log.info("relay_state", state=RelayState.RESPONDED_PLACEHOLDER, timeout_s=self.timeout_s)
        followup = self._spawn(self._follow_up(generation, reply_from, reply_to))
        return RelayOutcome(
            state=RelayState.RESPONDED_PLACEHOLDER,
            reply=PLACEHOLDER_REPLY,
            followup=followup,
        )

    async def _follow_up(
        self,
        generation: "asyncio.Task[str]",
        reply_from: str | None,
        reply_to: str | None,
    ) -> RelayState:
        log = logger.bind(reply_to=reply_to)
        try:
            body = await generation
        except Exception:
            log.exception("relay_followup_generation_failed")
            return RelayState.FOLLOWUP_DROPPED

        if not body:
            log.warning("relay_followup_empty")
            return RelayState.FOLLOWUP_DROPPED
        if self._send is None or not reply_from or not reply_to:
            log.warning("relay_followup_unroutable", has_sender=self._send is not None)
            return RelayState.FOLLOWUP_DROPPED

        try:
            await self._send(reply_from, reply_to, body)
        except Exception:
            log.exception("relay_followup_send_failed")
            return RelayState.FOLLOWUP_DROPPED

        log.info("relay_state", state=RelayState.FOLLOWUP_SENT)
        return RelayState.FOLLOWUP_SENT
