"""Tests for TelegramAdapter."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import InlineKeyboardMarkup
from telegram.error import NetworkError

from flowrelay.adapters.telegram import TelegramAdapter
from flowrelay.core.errors import TransportError
from flowrelay.schemas.relay import (
    Channel,
    OutboundButton,
    OutboundMessage,
    OutboundSendResult,
)

# Token format: digits:rest (e.g. 123456:ABC). No real API calls are made.
FAKE_TOKEN = "123456:AAHdqTcvCH1vGWJxfSeofSAs0K5P"


@pytest.fixture
def bot():
    mock_msg = MagicMock()
    mock_msg.message_id = 42
    mock_bot = MagicMock()
    mock_bot.send_message = AsyncMock(return_value=mock_msg)
    mock_bot.send_photo = AsyncMock(return_value=mock_msg)
    mock_bot.get_file = AsyncMock()
    return mock_bot


@pytest.fixture
def telegram_adapter(bot):
    return TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret=None, bot=bot)


def test_verify_webhook_no_secret(telegram_adapter):
    assert telegram_adapter.verify_webhook(None, {}) is True
    assert (
        telegram_adapter.verify_webhook(None, {"X-Telegram-Bot-Api-Secret-Token": "x"})
        is True
    )


def test_verify_webhook_with_secret():
    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret="secret")
    assert (
        adapter.verify_webhook("secret", {"X-Telegram-Bot-Api-Secret-Token": "secret"})
        is True
    )
    assert (
        adapter.verify_webhook("secret", {"X-Telegram-Bot-Api-Secret-Token": "wrong"})
        is False
    )


def test_verify_webhook_case_insensitive_header():
    """Headers are case-insensitive; Starlette/FastAPI lowercases them."""
    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret="my-secret")
    assert (
        adapter.verify_webhook(
            "my-secret", {"x-telegram-bot-api-secret-token": "my-secret"}
        )
        is True
    )


@pytest.mark.asyncio
async def test_send_text_returns_result(telegram_adapter, bot):
    outbound = OutboundMessage(channel=Channel.TELEGRAM, chat_id="123", text="hi")

    result = await telegram_adapter.send(outbound)

    assert isinstance(result, OutboundSendResult)
    assert result.success is True
    assert result.platform_message_id == "42"
    bot.send_message.assert_awaited_once_with(
        chat_id="123", text="hi", reply_to_message_id=None
    )


@pytest.mark.asyncio
async def test_send_buttons_builds_inline_keyboard(telegram_adapter, bot):
    outbound = OutboundMessage(
        channel=Channel.TELEGRAM,
        chat_id="123",
        text="Options:",
        buttons=[
            OutboundButton(label="Yes", callback_data="tok-yes"),
            OutboundButton(label="No", callback_data="tok-no"),
        ],
    )

    await telegram_adapter.send(outbound)

    markup = bot.send_message.await_args.kwargs["reply_markup"]
    assert isinstance(markup, InlineKeyboardMarkup)
    rows = markup.inline_keyboard
    assert [[(b.text, b.callback_data) for b in row] for row in rows] == [
        [("Yes", "tok-yes")],
        [("No", "tok-no")],
    ]


@pytest.mark.asyncio
async def test_send_image_uses_send_photo(telegram_adapter, bot):
    outbound = OutboundMessage(
        channel=Channel.TELEGRAM, chat_id="123", image_url="https://img/cat.png"
    )

    await telegram_adapter.send(outbound)

    bot.send_photo.assert_awaited_once()
    assert bot.send_photo.await_args.kwargs["photo"] == "https://img/cat.png"
    bot.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_send_api_error_raises_transport_error(telegram_adapter, bot):
    bot.send_message.side_effect = NetworkError("connection reset")
    outbound = OutboundMessage(channel=Channel.TELEGRAM, chat_id="123", text="hi")

    with pytest.raises(TransportError):
        await telegram_adapter.send(outbound)


@pytest.mark.asyncio
async def test_resolve_file_url_relative_path(telegram_adapter, bot):
    bot.get_file.return_value = MagicMock(file_path="voice/file_7.oga")

    url = await telegram_adapter.resolve_file_url("file-id")

    assert url == f"https://api.telegram.org/file/bot{FAKE_TOKEN}/voice/file_7.oga"


@pytest.mark.asyncio
async def test_resolve_file_url_absolute_path(telegram_adapter, bot):
    absolute = f"https://api.telegram.org/file/bot{FAKE_TOKEN}/photos/file_1.jpg"
    bot.get_file.return_value = MagicMock(file_path=absolute)

    assert await telegram_adapter.resolve_file_url("file-id") == absolute


@pytest.mark.asyncio
async def test_resolve_file_url_failure(telegram_adapter, bot):
    bot.get_file.side_effect = NetworkError("timeout")
    with pytest.raises(TransportError):
        await telegram_adapter.resolve_file_url("file-id")
