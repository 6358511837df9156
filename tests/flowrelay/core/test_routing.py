"""Tests for text and media routing."""

import pytest

from flowrelay.core.routing import is_supported_document, route_media, route_text
from flowrelay.schemas.relay import LaunchEvent, MediaReferenceEvent, TextEvent


@pytest.mark.parametrize("text", ["hi", "Hi", "HI", "hI"])
def test_greeting_launches(text):
    event = route_text(text)
    assert isinstance(event, LaunchEvent)
    assert event.to_request() == {"type": "launch"}


@pytest.mark.parametrize("text", ["hi there", "high", "ohi", "hello", "hi\n", " hi"])
def test_other_text_is_relayed_verbatim(text):
    event = route_text(text)
    assert event == TextEvent(text=text)
    assert event.to_request() == {"type": "text", "payload": text}


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_text_is_ignored(text):
    assert route_text(text) is None


def test_media_url_is_the_message_text():
    event = route_media("https://api.telegram.org/file/botX/photos/file_1.jpg")
    assert isinstance(event, MediaReferenceEvent)
    assert event.text == event.url
    assert event.to_request() == {
        "type": "text",
        "payload": "https://api.telegram.org/file/botX/photos/file_1.jpg",
    }


def test_only_pdf_documents_are_supported():
    assert is_supported_document("application/pdf") is True
    assert is_supported_document("image/png") is False
    assert is_supported_document(None) is False
