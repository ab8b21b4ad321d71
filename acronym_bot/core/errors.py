# Error taxonomy for handling a single Slack webhook delivery


class AcronymBotError(Exception):
    """Base class for failures while handling one webhook request."""


class SignatureMismatch(AcronymBotError):
    """The request did not carry a valid Slack signature."""


class MalformedPayload(AcronymBotError):
    """The request body is not a JSON object in the Slack events shape."""


class DispatchError(AcronymBotError):
    """Posting the reply to Slack failed at the transport layer."""
