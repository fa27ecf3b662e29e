"""Out-of-band WhatsApp message sending through the Twilio REST API."""

import asyncio

import structlog
from twilio.rest import Client

logger = structlog.get_logger()


class TwilioSender:
    """Send messages via ``Client.messages.create`` without blocking the event loop.

    Args:
        account_sid: Twilio account SID.
        auth_token: Twilio auth token.
        client: Optional pre-built REST client.
    """

    def __init__(self, account_sid: str, auth_token: str, client: Client | None = None):
        self._client = client or Client(account_sid, auth_token)

    async def __call__(self, from_: str, to: str, body: str) -> str:
        message = await asyncio.to_thread(
            self._client.messages.create, from_=from_, to=to, body=body
        )
        logger.info("whatsapp_message_sent", to=to, sid=message.sid)
        return message.sid
