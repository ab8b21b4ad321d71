# Pydantic models for Slack Events API payloads.
#
# Slack posts two envelope shapes to the events endpoint:
#
#   - url_verification: sent once when the Request URL is registered. The
#     endpoint must echo the challenge value back.
#
#   - event_callback: wraps the actual event (app_mention, reaction_added, ...)
#     in the "event" field.
#
# Every field except "type" is optional in practice, so each one carries a
# default and null child lists become empty lists.

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

URL_VERIFICATION = "url_verification"
EVENT_CALLBACK = "event_callback"
APP_MENTION = "app_mention"
RICH_TEXT = "rich_text"
TEXT_ELEMENT = "text"


def _null_as_empty(value):
    return [] if value is None else value


def _mappings_only(value):
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    return value


def _str_or_none(value):
    return value if isinstance(value, str) else None


class EnvelopeKind(str, Enum):
    CHALLENGE = "challenge"
    EVENT_NOTIFICATION = "event_notification"
    UNROUTABLE = "unroutable"


class ElementBase(BaseModel):
    """Fields shared by rich-text nodes. Non-string leaf values count as absent."""
    model_config = ConfigDict(frozen=True)

    type: str = ""
    user_id: Optional[str] = None
    text: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def non_string_type_as_empty(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("user_id", "text", mode="before")
    @classmethod
    def non_string_as_absent(cls, value):
        return _str_or_none(value)


class ChildElement(ElementBase):
    """A node one level below a block's top-level element.

    Its own children are kept as raw JSON and never validated, so nesting
    depth below this level is unbounded and unread.
    """

    elements: List[Any] = Field(default_factory=list)

    @field_validator("elements", mode="before")
    @classmethod
    def null_elements_as_empty(cls, value):
        return value if isinstance(value, list) else []


class Element(ElementBase):
    """A top-level rich-text node, e.g. a rich_text_section holding text runs."""

    elements: List[ChildElement] = Field(default_factory=list)

    @field_validator("elements", mode="before")
    @classmethod
    def mapping_elements_only(cls, value):
        return _mappings_only(value)


class Block(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    block_id: Optional[str] = None
    elements: List[Element] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def non_string_type_as_empty(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("block_id", mode="before")
    @classmethod
    def non_string_block_id_as_absent(cls, value):
        return _str_or_none(value)

    @field_validator("elements", mode="before")
    @classmethod
    def mapping_elements_only(cls, value):
        return _mappings_only(value)


class SlackEvent(BaseModel):
    """An app_mention event. Only validated once the event type is known."""
    model_config = ConfigDict(frozen=True)

    type: str = ""
    client_msg_id: Optional[str] = None
    text: Optional[str] = None
    user: Optional[str] = None
    ts: Optional[str] = None
    team: Optional[str] = None
    blocks: List[Block] = Field(default_factory=list)
    channel: str = ""
    event_ts: Optional[str] = None

    @field_validator("blocks", mode="before")
    @classmethod
    def mapping_blocks_only(cls, value):
        return _mappings_only(value)


class EventEnvelope(BaseModel):
    """Top-level payload Slack sends to the events endpoint.

    The inner event stays a raw mapping: its shape depends on its type.
    """
    model_config = ConfigDict(frozen=True)

    type: str = ""
    token: str = ""
    challenge: Optional[str] = None
    event_id: Optional[str] = None
    event_time: Optional[Union[int, str]] = None
    authed_users: List[str] = Field(default_factory=list)
    event: Optional[Dict[str, Any]] = None

    @field_validator("authed_users", mode="before")
    @classmethod
    def null_authed_users_as_empty(cls, value):
        return _null_as_empty(value)

    @property
    def event_type(self) -> Optional[str]:
        if self.event is None:
            return None
        event_type = self.event.get("type")
        return event_type if isinstance(event_type, str) else ""
