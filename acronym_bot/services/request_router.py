# Sequences one webhook delivery: verify, classify, extract, resolve, reply

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from acronym_bot.config import Settings, load_settings
from acronym_bot.core.errors import DispatchError, MalformedPayload, SignatureMismatch
from acronym_bot.core.security import verify_slack_request
from acronym_bot.integrations.slack.client import SlackReplyDispatcher
from acronym_bot.integrations.slack.events import classify, parse_app_mention, parse_envelope
from acronym_bot.models.slack_event import EnvelopeKind
from acronym_bot.services.acronyms import AcronymTable, load_acronyms, resolve
from acronym_bot.services.text_extractor import extract_text

logger = logging.getLogger(__name__)

UNAUTHORIZED_BODY = "Signature verification failed. You are not Slack!"
MALFORMED_BODY = "Malformed Slack event payload."
DISPATCH_FAILED_BODY = "Failed to post the reply to Slack."
REPLIED_BODY = json.dumps({"text": "acronym"}, separators=(",", ":"))

TEXT_PLAIN = {"content-type": "text/plain"}
APPLICATION_JSON = {"content-type": "application/json"}


@dataclass(frozen=True)
class RouterResponse:
    status_code: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    def as_lambda_response(self) -> dict:
        """API Gateway proxy integration shape."""
        return {"statusCode": self.status_code, "headers": dict(self.headers), "body": self.body}


class RequestRouter:
    def __init__(self, settings: Settings, acronyms: AcronymTable, dispatcher):
        self._settings = settings
        self._acronyms = acronyms
        self._dispatcher = dispatcher

    async def handle(self, method: str, headers: Mapping[str, str], raw_body: bytes) -> RouterResponse:
        """Handles one Slack delivery and maps the outcome to a response.

        No retries: each terminal state maps to exactly one status code.
        """
        try:
            verify_slack_request(
                headers,
                raw_body,
                self._settings.signing_secret_bytes,
                signature_header=self._settings.signature_header,
                timestamp_header=self._settings.timestamp_header,
            )
        except SignatureMismatch as e:
            logger.warning(f"Rejected Slack request: {e}")
            return RouterResponse(401, UNAUTHORIZED_BODY, dict(TEXT_PLAIN))

        try:
            envelope = parse_envelope(raw_body)
        except MalformedPayload as e:
            logger.warning(f"Rejected Slack request with malformed payload: {e}")
            return RouterResponse(400, MALFORMED_BODY, dict(TEXT_PLAIN))

        kind = classify(method, envelope, self._settings.slack_verification_token)

        if kind is EnvelopeKind.CHALLENGE:
            logger.info("Received Slack URL verification challenge.")
            return RouterResponse(200, envelope.challenge or "", dict(TEXT_PLAIN))

        if kind is EnvelopeKind.UNROUTABLE:
            return RouterResponse(204, "")

        try:
            event = parse_app_mention(envelope)
        except MalformedPayload as e:
            logger.warning(f"Rejected Slack app_mention with malformed event: {e}")
            return RouterResponse(400, MALFORMED_BODY, dict(TEXT_PLAIN))

        logger.info(f"Handling app_mention {event.client_msg_id} in channel {event.channel} (event {envelope.event_id})")

        text = extract_text(event.blocks)
        definitions = resolve(text, self._acronyms)
        logger.info(f"Resolved '{text}' to {definitions}")

        try:
            await self._dispatcher.dispatch(event.channel, definitions)
        except DispatchError as e:
            logger.error(f"Could not reply to app_mention in channel {event.channel}: {e}")
            return RouterResponse(502, DISPATCH_FAILED_BODY, dict(TEXT_PLAIN))

        return RouterResponse(200, REPLIED_BODY, dict(APPLICATION_JSON))


def build_request_router(
    settings: Optional[Settings] = None,
    acronyms: Optional[AcronymTable] = None,
    dispatcher=None,
) -> RequestRouter:
    """Wires a RequestRouter from configuration, filling in defaults."""
    if settings is None:
        settings = load_settings()
    settings.validate()
    if acronyms is None:
        acronyms = load_acronyms(settings.acronyms_path)
    if dispatcher is None:
        dispatcher = SlackReplyDispatcher.from_settings(settings)
    return RequestRouter(settings, acronyms, dispatcher)
