"""Translate chat input into inbound events before it reaches the orchestrator."""

from __future__ import annotations

import re
from typing import Optional

from flowrelay.schemas.relay import (
    InboundEvent,
    LaunchEvent,
    MediaReferenceEvent,
    TextEvent,
)

# "hi" restarts the conversation from the top
GREETING_PATTERN = re.compile(r"hi", re.IGNORECASE)

PDF_MIME_TYPE = "application/pdf"


def route_text(text: Optional[str]) -> Optional[InboundEvent]:
    """Greeting → launch, anything else non-empty → text, empty → None."""
    if text is None or not text.strip():
        return None
    if GREETING_PATTERN.fullmatch(text):
        return LaunchEvent()
    return TextEvent(text=text)


def route_media(url: str) -> MediaReferenceEvent:
    return MediaReferenceEvent(url=url)


def is_supported_document(mime_type: Optional[str]) -> bool:
    return mime_type == PDF_MIME_TYPE
