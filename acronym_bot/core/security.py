# Slack request signature verification

import hashlib
import hmac
import logging
from typing import Mapping, Optional

from acronym_bot.config import DEFAULT_SIGNATURE_HEADER, DEFAULT_TIMESTAMP_HEADER
from acronym_bot.core.errors import SignatureMismatch

logger = logging.getLogger(__name__)

SIGNATURE_VERSION = "v0"


def _digest(secret: bytes, version: str, timestamp: str, raw_body: bytes) -> bytes:
    base_string = f"{version}:{timestamp}:".encode("utf-8") + raw_body
    return hmac.new(secret, base_string, hashlib.sha256).digest()


def compute_signature(secret: bytes, timestamp: str, raw_body: bytes, version: str = SIGNATURE_VERSION) -> str:
    """Returns the ``<version>=<hexdigest>`` value Slack would send for this body."""
    return f"{version}={_digest(secret, version, timestamp, raw_body).hex()}"


def verify_signature(signature: Optional[str], timestamp: Optional[str], raw_body: bytes, secret: bytes) -> bool:
    """Checks an ``X-Slack-Signature`` value against the raw request body.

    The signature header has the form ``<version>=<hexdigest>``; without a
    separator the digest half is empty. The version is taken from the header
    itself and folded into the signed base string, so a forged version only
    produces a different (wrong) digest. The digest must be computed over the
    untouched body bytes, never a re-serialized payload.
    """
    version, _, received_hex = (signature or "").partition("=")
    expected = _digest(secret, version, timestamp or "", raw_body)

    try:
        received = bytes.fromhex(received_hex)
    except ValueError:
        received = b""

    if len(received) != len(expected):
        logger.warning(
            f"Slack signature digest is {len(received)} bytes, expected {len(expected)} bytes."
        )
        return False
    return hmac.compare_digest(received, expected)


def header_value(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup over a plain mapping."""
    value = headers.get(name)
    if value is not None:
        return value
    wanted = name.lower()
    for key, candidate in headers.items():
        if key.lower() == wanted:
            return candidate
    return None


def verify_slack_request(
    headers: Mapping[str, str],
    raw_body: bytes,
    secret: bytes,
    signature_header: str = DEFAULT_SIGNATURE_HEADER,
    timestamp_header: str = DEFAULT_TIMESTAMP_HEADER,
):
    """Verifies the authenticity of an incoming Slack request.

    Raises SignatureMismatch when the signature does not match.
    """
    signature = header_value(headers, signature_header)
    timestamp = header_value(headers, timestamp_header)
    logger.debug(f"Verifying Slack request with timestamp {timestamp}")

    if not verify_signature(signature, timestamp, raw_body, secret):
        raise SignatureMismatch("Slack request signature did not match.")
