"""WhatsApp webhook: signature check, then the deferred-reply relay.

Every response is HTTP 200 with a TwiML body; failures are reported in the
message text rather than the status code.
"""

import functools
from urllib.parse import parse_qsl

import structlog
from fastapi import APIRouter, Request, Response
from twilio.twiml.messaging_response import MessagingResponse

from mwanafrika.config import get_settings
from mwanafrika.models.tutoring import TutorMessage
from mwanafrika.tutor.client import get_tutor_client
from mwanafrika.whatsapp.relay import DeferredReplyRelay
from mwanafrika.whatsapp.sender import TwilioSender
from mwanafrika.whatsapp.signature import SIGNATURE_HEADER, external_url, is_valid_signature

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

STATUS_REPLY = "WhatsApp webhook is up."
MISSING_TOKEN_REPLY = "Server missing TWILIO_AUTH_TOKEN. Please contact the administrator."
INVALID_SIGNATURE_REPLY = "Signature validation failed."
EMPTY_MESSAGE_REPLY = "Hi! Please send a message to start chatting with MwanAfrika Tutor."
APOLOGY_REPLY = "Sorry, something went wrong. Please try again later."


def twiml(message: str) -> Response:
    resp = MessagingResponse()
    resp.message(message)
    return Response(content=str(resp), media_type="text/xml", status_code=200)


async def tutor_reply(text: str) -> str:
    client = get_tutor_client()
    return await client.generate_reply([TutorMessage(sender="user", content=text)])


@functools.lru_cache
def get_relay() -> DeferredReplyRelay:
    """Process-wide relay; follow-ups are disabled without REST credentials."""
    settings = get_settings()
    sender = None
    if settings.twilio_account_sid and settings.twilio_auth_token:
        sender = TwilioSender(settings.twilio_account_sid, settings.twilio_auth_token)
    return DeferredReplyRelay(
        generate=tutor_reply,
        send=sender,
        timeout_s=settings.whatsapp_timeout_seconds,
    )


@router.get("/whatsapp")
async def whatsapp_status() -> Response:
    return twiml(STATUS_REPLY)


@router.post("/whatsapp")
async def whatsapp_webhook(request: Request) -> Response:
    """Handle one inbound WhatsApp message."""
    try:
        settings = get_settings()
        if not settings.twilio_auth_token:
            return twiml(MISSING_TOKEN_REPLY)

        raw = (await request.body()).decode("utf-8")
        params = dict(parse_qsl(raw, keep_blank_values=True))

        url = external_url(
            scheme=request.url.scheme,
            netloc=request.url.netloc,
            path=request.url.path,
            query=request.url.query,
            headers=request.headers,
        )
        signature = request.headers.get(SIGNATURE_HEADER, "")
        if not is_valid_signature(settings.twilio_auth_token, url, params, signature):
            if not settings.is_development:
                logger.warning("whatsapp_signature_rejected", url=url)
                return twiml(INVALID_SIGNATURE_REPLY)
            logger.warning("whatsapp_signature_skipped", url=url)

        text = params.get("Body", "").strip()
        if not text:
            return twiml(EMPTY_MESSAGE_REPLY)

        outcome = await get_relay().relay(
            text,
            reply_from=params.get("To"),
            reply_to=params.get("From"),
        )
        return twiml(outcome.reply)
    except Exception:
        logger.exception("whatsapp_webhook_failed")
        return twiml(APOLOGY_REPLY)
