"""
Normalized message contracts for the relay.

Inbound chat updates are converted into an ``InboundEvent`` before they reach
the orchestrator; everything sent back to a chat goes out as an
``OutboundMessage``. Stable and independent of the chat platform.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

# Opaque dialogue engine request, forwarded verbatim.
DialogueRequest = dict[str, Any]

LAUNCH_REQUEST_TYPE = "launch"
TEXT_REQUEST_TYPE = "text"


class Channel(str, Enum):
    """Supported chat channels."""

    TELEGRAM = "telegram"


class LaunchEvent(BaseModel):
    """Start (or restart) the conversation."""

    kind: Literal["launch"] = "launch"

    def to_request(self) -> DialogueRequest:
        return {"type": LAUNCH_REQUEST_TYPE}


class TextEvent(BaseModel):
    """Free text typed by the user, or a voice note after transcription."""

    kind: Literal["text"] = "text"
    text: str

    def to_request(self) -> DialogueRequest:
        return {"type": TEXT_REQUEST_TYPE, "payload": self.text}


class MediaReferenceEvent(BaseModel):
    """A photo or document, resolved to a publicly fetchable URL."""

    kind: Literal["media"] = "media"
    url: str

    @property
    def text(self) -> str:
        # The URL stands in for the message text.
        return self.url

    def to_request(self) -> DialogueRequest:
        return {"type": TEXT_REQUEST_TYPE, "payload": self.url}


class ButtonSelectionEvent(BaseModel):
    """A press on a button previously rendered for a choice directive."""

    kind: Literal["button"] = "button"
    token: str


InboundEvent = Annotated[
    Union[LaunchEvent, TextEvent, MediaReferenceEvent, ButtonSelectionEvent],
    Field(discriminator="kind"),
]


class OutboundButton(BaseModel):
    """One inline button: visible label plus the opaque selection identifier."""

    label: str
    callback_data: str


class OutboundMessage(BaseModel):
    """Normalized outbound message (core → adapter)."""

    channel: Channel
    chat_id: str
    text: Optional[str] = None
    image_url: Optional[str] = None
    buttons: list[OutboundButton] = Field(default_factory=list)
    reply_to_message_id: Optional[str] = None


class OutboundSendResult(BaseModel):
    """Result of sending an outbound message (success + optional message_id)."""

    success: bool
    platform_message_id: Optional[str] = None
