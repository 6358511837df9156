"""
Telegram webhook payload schemas.

Covers the parts of an update the relay reacts to: messages (text, voice,
photo, document) and callback queries from inline buttons. Unknown fields are
kept so the full payload can be handed to python-telegram-bot unchanged.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    """Telegram user (message.from)."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    language_code: Optional[str] = None


class TelegramChat(BaseModel):
    """Telegram chat (message.chat)."""

    id: int
    type: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class TelegramFile(BaseModel):
    """Any file-like object (voice, photo size, document)."""

    file_id: str
    file_unique_id: Optional[str] = None
    mime_type: Optional[str] = None


class TelegramMessage(BaseModel):
    """Telegram message (update.message)."""

    message_id: int
    from_: Optional[TelegramUser] = Field(default=None, alias="from")
    chat: TelegramChat
    date: int
    text: Optional[str] = None
    voice: Optional[TelegramFile] = None
    photo: Optional[list[TelegramFile]] = None
    document: Optional[TelegramFile] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class TelegramCallbackQuery(BaseModel):
    """Inline button press (update.callback_query)."""

    id: str
    from_: TelegramUser = Field(alias="from")
    message: Optional[TelegramMessage] = None
    data: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class TelegramWebhookUpdate(BaseModel):
    """Telegram webhook update payload (root object)."""

    update_id: int
    message: Optional[TelegramMessage] = None
    callback_query: Optional[TelegramCallbackQuery] = None

    model_config = ConfigDict(extra="allow")

    @property
    def chat_id(self) -> Optional[str]:
        if self.message is not None:
            return str(self.message.chat.id)
        if self.callback_query is not None and self.callback_query.message:
            return str(self.callback_query.message.chat.id)
        return None
