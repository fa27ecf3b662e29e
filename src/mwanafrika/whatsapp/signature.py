"""Inbound webhook signature validation."""

from collections.abc import Mapping

import structlog
from twilio.request_validator import RequestValidator

logger = structlog.get_logger()

SIGNATURE_HEADER = "x-twilio-signature"


def external_url(
    scheme: str,
    netloc: str,
    path: str,
    query: str,
    headers: Mapping[str, str],
) -> str:
    """Rebuild the callback URL the sender signed when we sit behind a proxy."""
    proto = headers.get("x-forwarded-proto") or scheme
    host = headers.get("x-forwarded-host") or headers.get("host") or netloc
    url = f"{proto}://{host}{path}"
    return f"{url}?{query}" if query else url


def is_valid_signature(
    auth_token: str,
    url: str,
    params: Mapping[str, str],
    signature: str,
) -> bool:
    """HMAC check over the callback URL and form parameters.

    Validator errors count as an invalid signature.
    """
    try:
        return RequestValidator(auth_token).validate(url, dict(params), signature)
    except Exception:
        logger.warning("signature_validation_error", url=url, exc_info=True)
        return False
