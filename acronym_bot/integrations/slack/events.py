# Decoding and classification of Slack Events API envelopes

import hmac
import json
import logging

from pydantic import ValidationError

from acronym_bot.core.errors import MalformedPayload
from acronym_bot.models.slack_event import (
    APP_MENTION,
    URL_VERIFICATION,
    EnvelopeKind,
    EventEnvelope,
    SlackEvent,
)

logger = logging.getLogger(__name__)


def parse_envelope(raw_body: bytes) -> EventEnvelope:
    """Decodes the raw request body into an EventEnvelope.

    An empty body decodes as an empty object. Anything that is not a JSON
    object in the Slack events shape raises MalformedPayload.
    """
    try:
        data = json.loads(raw_body or b"{}")
    except (ValueError, RecursionError) as e:
        raise MalformedPayload(f"Request body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayload(f"Request body must be a JSON object, got {type(data).__name__}.")

    try:
        return EventEnvelope.model_validate(data)
    except (ValidationError, RecursionError) as e:
        raise MalformedPayload(f"Request body does not match the Slack events schema: {e}") from e


def is_challenge(method: str, envelope: EventEnvelope, expected_token: str) -> bool:
    if (method or "").upper() != "POST":
        return False
    if envelope.type != URL_VERIFICATION:
        return False
    return hmac.compare_digest(envelope.token.encode("utf-8"), expected_token.encode("utf-8"))


def classify(method: str, envelope: EventEnvelope, expected_token: str) -> EnvelopeKind:
    """Decides how the router should treat a verified envelope."""
    if is_challenge(method, envelope, expected_token):
        return EnvelopeKind.CHALLENGE

    if envelope.event_type == APP_MENTION:
        return EnvelopeKind.EVENT_NOTIFICATION

    logger.info(f"Ignoring Slack envelope of type '{envelope.type}' with event type '{envelope.event_type}'.")
    return EnvelopeKind.UNROUTABLE


def parse_app_mention(envelope: EventEnvelope) -> SlackEvent:
    """Validates the embedded event as an app_mention.

    Only called once classify has routed the envelope, so other event kinds
    never meet this schema.
    """
    try:
        return SlackEvent.model_validate(envelope.event or {})
    except ValidationError as e:
        raise MalformedPayload(f"app_mention event does not match the expected schema: {e}") from e
