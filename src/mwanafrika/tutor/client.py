"""Generative-language client for tutoring replies and JSON content."""

import functools
import json
import re
from typing import Any

import openai
import structlog
from openai import AsyncOpenAI

from mwanafrika.config import get_settings
from mwanafrika.errors import ContentParseError, MissingCredentialsError, UpstreamError
from mwanafrika.models.tutoring import TutorMessage
from mwanafrika.tutor.prompts import build_tutor_instructions

logger = structlog.get_logger()


def strip_code_fences(text: str) -> str:
    """Remove Markdown ```json / ``` markers the model wraps around JSON."""
    text = re.sub(r"```json\n?", "", text)
    return re.sub(r"```\n?", "", text).strip()


def _content_parts(message: TutorMessage) -> list[dict[str, Any]]:
    parts: list[dict[str, Any]] = []
    text = message.content or ""
    if text.strip():
        parts.append({"type": "text", "text": text})
    image = message.image_data
    if image is not None and image.data and image.mime_type:
        parts.append({
            "type": "image_url",
            "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"},
        })
    return parts


def build_history(messages: list[TutorMessage]) -> list[dict[str, Any]]:
    """Convert all but the last tutor message into chat-completion turns.

    Unknown senders and empty turns are dropped, and the history always
    opens with a user turn (leading assistant turns are discarded). The
    OpenAI-compatible endpoint accepts image parts on user turns only.
    """
    history: list[dict[str, Any]] = []
    for message in messages[:-1]:
        if message.sender not in ("user", "ai"):
            continue
        parts = _content_parts(message)
        if message.sender == "ai":
            # assistant turns carry text only; an image-only assistant turn is dropped
            text = "\n".join(p["text"] for p in parts if p["type"] == "text")
            if text:
                history.append({"role": "assistant", "content": text})
        elif parts:
            history.append({"role": "user", "content": parts})

    first_user = next((i for i, turn in enumerate(history) if turn["role"] == "user"), None)
    if first_user is None:
        return []
    return history[first_user:]


class TutorClient:
    """Thin wrapper around the provider's OpenAI-compatible chat endpoint.

    Constructed once per process and shared; holds no per-request state.

    Args:
        api_key: Provider API key.
        model: Model identifier.
        base_url: OpenAI-compatible endpoint of the provider.
    """

    def __init__(self, api_key: str, model: str, base_url: str | None = None):
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.model = model

    async def _complete(self, messages: list[dict[str, Any]], **kwargs) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                **kwargs,
            )
        except openai.APIStatusError as exc:
            raise UpstreamError(str(exc), status=exc.status_code) from exc
        except openai.APIError as exc:
            raise UpstreamError(str(exc)) from exc
        return response.choices[0].message.content or ""

    async def generate_reply(
        self,
        messages: list[TutorMessage],
        subject: str | None = None,
    ) -> str:
        """Answer the last message of a tutoring conversation.

        Args:
            messages: Conversation so far; the final entry is the one to answer.
            subject: Optional subject to focus the tutor on.

        Returns:
            The tutor's reply text.
        """
        last = messages[-1] if messages else TutorMessage(sender="user", content="")
        last_parts = _content_parts(last) or [{"type": "text", "text": ""}]
        chat = [
            {"role": "system", "content": build_tutor_instructions(subject)},
            *build_history(messages),
            {"role": "user", "content": last_parts},
        ]
        text = await self._complete(chat)
        logger.info("tutor_reply_generated", turns=len(chat), chars=len(text))
        return text

    async def generate_json(self, prompt: str) -> Any:
        """Run a single-prompt completion and parse its JSON body.

        Raises:
            UpstreamError: The provider call failed.
            ContentParseError: The model did not return valid JSON.
        """
        text = await self._complete([{"role": "user", "content": prompt}])
        try:
            return json.loads(strip_code_fences(text))
        except json.JSONDecodeError as exc:
            logger.warning("json_parse_failed", preview=text[:200])
            raise ContentParseError(str(exc), raw_response=text) from exc


@functools.lru_cache
def get_tutor_client() -> TutorClient:
    """Process-wide tutor client; raises MissingCredentialsError without a key."""
    settings = get_settings()
    if not settings.google_api_key:
        raise MissingCredentialsError(
            "Missing GOOGLE_API_KEY (or GEMINI_API_KEY) in environment."
        )
    return TutorClient(
        api_key=settings.google_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
    )
