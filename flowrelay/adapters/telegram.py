"""
Telegram platform adapter.

Uses python-telegram-bot (v22) for outbound messages and file lookups.
"""

from __future__ import annotations

from typing import Any, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.error import TelegramError

from flowrelay.adapters.base import BasePlatformAdapter
from flowrelay.core.errors import TransportError
from flowrelay.schemas.relay import Channel, OutboundMessage, OutboundSendResult

FILE_URL_TEMPLATE = "https://api.telegram.org/file/bot{token}/{file_path}"


class TelegramAdapter(BasePlatformAdapter):
    """Telegram adapter: send messages, photos and inline keyboards via Bot API."""

    TELEGRAM_SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"

    def __init__(
        self,
        bot_token: str,
        webhook_secret: Optional[str] = None,
        bot: Optional[Bot] = None,
    ) -> None:
        self._bot_token = bot_token
        self._webhook_secret = webhook_secret
        self._bot: Optional[Bot] = bot

    def _get_bot(self) -> Bot:
        if self._bot is None:
            self._bot = Bot(token=self._bot_token)
        return self._bot

    def verify_webhook(
        self, secret: Optional[str], request_headers: Optional[dict[str, str]] = None
    ) -> bool:
        """Validate X-Telegram-Bot-Api-Secret-Token if webhook secret is configured."""
        expected = secret or self._webhook_secret
        if not expected:
            return True
        request_headers = request_headers or {}
        header_lower = self.TELEGRAM_SECRET_HEADER.lower()
        actual = None
        for key, value in request_headers.items():
            if key.lower() == header_lower:
                actual = value
                break
        return actual == expected

    async def send(self, outbound: OutboundMessage) -> OutboundSendResult:
        """Send message via Telegram Bot API. chat_id = outbound.chat_id."""
        if outbound.channel != Channel.TELEGRAM:
            return OutboundSendResult(success=False, platform_message_id=None)

        bot = self._get_bot()
        reply_to = (
            int(outbound.reply_to_message_id) if outbound.reply_to_message_id else None
        )
        try:
            if outbound.image_url:
                sent = await bot.send_photo(
                    chat_id=outbound.chat_id,
                    photo=outbound.image_url,
                    caption=outbound.text,
                    reply_to_message_id=reply_to,
                )
            else:
                send_kw: dict[str, Any] = {
                    "chat_id": outbound.chat_id,
                    "text": outbound.text or "",
                    "reply_to_message_id": reply_to,
                }
                if outbound.buttons:
                    # one button per row, like a vertical menu
                    send_kw["reply_markup"] = InlineKeyboardMarkup(
                        [
                            [
                                InlineKeyboardButton(
                                    text=button.label,
                                    callback_data=button.callback_data,
                                )
                            ]
                            for button in outbound.buttons
                        ]
                    )
                sent = await bot.send_message(**send_kw)
        except TelegramError as e:
            raise TransportError(
                f"Telegram send to chat {outbound.chat_id} failed: {e}"
            ) from e
        return OutboundSendResult(
            success=True,
            platform_message_id=(
                str(sent.message_id) if sent and sent.message_id else None
            ),
        )

    async def resolve_file_url(self, file_id: str) -> str:
        """Look the file up and return its download URL."""
        try:
            tg_file = await self._get_bot().get_file(file_id)
        except TelegramError as e:
            raise TransportError(f"Telegram file lookup failed: {e}") from e
        file_path = tg_file.file_path
        if not file_path:
            raise TransportError(f"Telegram returned no path for file {file_id}")
        # Recent Bot API clients already hand back an absolute URL
        if file_path.startswith(("http://", "https://")):
            return file_path
        return FILE_URL_TEMPLATE.format(token=self._bot_token, file_path=file_path)
