"""Telegram channel plugin using python-telegram-bot (v22)."""

from __future__ import annotations

from typing import Any, Optional

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from flowrelay.adapters.telegram import TelegramAdapter
from flowrelay.channels.base import ChannelCapabilities, ChannelMeta
from flowrelay.core.errors import TransportError
from flowrelay.core.orchestrator import RelayOrchestrator, notify
from flowrelay.core.routing import is_supported_document, route_media, route_text
from flowrelay.core.sink import ChannelRenderSink
from flowrelay.infra.logging_config import get_logger
from flowrelay.schemas.relay import (
    ButtonSelectionEvent,
    Channel,
    InboundEvent,
    LaunchEvent,
    TextEvent,
)
from flowrelay.services.transcription_service import TranscriptionService

from .config import TelegramConfig

logger = get_logger("telegram")

TRANSCRIPTION_FAILED_MESSAGE = "Failed to transcribe the voice message."
VOICE_FAILURE_MESSAGE = "Sorry, something went wrong processing your voice message."
UNSUPPORTED_FILE_MESSAGE = (
    "Only images and PDF files are supported. Please upload a valid file."
)
FILE_FAILURE_MESSAGE = "Sorry, something went wrong while processing your file."


class TelegramPlugin:
    id = "telegram"
    meta = ChannelMeta(label="Telegram", docs="https://core.telegram.org/bots/api")
    capabilities = ChannelCapabilities(
        chat_types=["direct", "group"],
        supports_webhook=True,
        supports_polling=True,
        supports_buttons=True,
        supports_voice=True,
        supports_media=True,
    )

    def __init__(
        self,
        cfg: TelegramConfig,
        orchestrator: RelayOrchestrator,
        transcription: TranscriptionService,
    ) -> None:
        self.cfg = cfg
        self.orchestrator = orchestrator
        self.transcription = transcription
        self.adapter = TelegramAdapter(
            bot_token=cfg.bot_token, webhook_secret=cfg.webhook_secret
        )
        self._app: Optional[Application] = None

    @property
    def running(self) -> bool:
        return self._app is not None and self._app.running

    def build_application(self) -> Application:
        # updates are handled concurrently; one slow chat must not hold up others
        app = (
            ApplicationBuilder()
            .token(self.cfg.bot_token)
            .concurrent_updates(True)
            .build()
        )
        app.add_handler(CommandHandler("start", self._on_start))
        app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self._on_text))
        app.add_handler(MessageHandler(filters.VOICE, self._on_voice))
        app.add_handler(
            MessageHandler(filters.PHOTO | filters.Document.ALL, self._on_file)
        )
        app.add_handler(CallbackQueryHandler(self._on_callback))
        app.add_error_handler(self._on_error)
        return app

    async def start(self) -> None:
        self._app = self.build_application()
        self.adapter = TelegramAdapter(
            bot_token=self.cfg.bot_token,
            webhook_secret=self.cfg.webhook_secret,
            bot=self._app.bot,
        )
        await self._app.initialize()
        await self._app.start()

        if self.cfg.mode == "polling":
            await self._app.updater.start_polling()
        elif self.cfg.webhook_url:
            await self._app.bot.set_webhook(
                url=self.cfg.webhook_url, secret_token=self.cfg.webhook_secret
            )
        logger.info("Telegram plugin started in %s mode", self.cfg.mode)

    async def stop(self) -> None:
        if self._app is None:
            return
        if self._app.updater is not None and self._app.updater.running:
            await self._app.updater.stop()
        if self._app.running:
            await self._app.stop()
        await self._app.shutdown()
        self._app = None
        logger.info("Telegram plugin stopped")

    async def process_webhook_update(self, payload: dict[str, Any]) -> None:
        """Queue a webhook update; the application processes it in the background."""
        if self._app is None:
            raise RuntimeError("Telegram plugin not started")
        update = Update.de_json(payload, self._app.bot)
        if update is None:
            raise ValueError("Invalid Telegram update: de_json returned None")
        await self._app.update_queue.put(update)

    def _sink(self, chat_id: str) -> ChannelRenderSink:
        return ChannelRenderSink(self.adapter, Channel.TELEGRAM, chat_id)

    async def _relay(self, chat_id: str, event: InboundEvent) -> None:
        await self.orchestrator.handle(chat_id, event, self._sink(chat_id))

    async def _on_start(
        self, update: Update, _context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        chat = update.effective_chat
        if chat is None:
            return
        await self._relay(str(chat.id), LaunchEvent())

    async def _on_text(
        self, update: Update, _context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        msg = update.effective_message
        if msg is None:
            return
        event = route_text(msg.text)
        if event is None:
            return
        logger.info("Received text from chat %s", msg.chat_id)
        await self._relay(str(msg.chat_id), event)

    async def _on_voice(
        self, update: Update, _context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        msg = update.effective_message
        if msg is None or msg.voice is None:
            return
        chat_id = str(msg.chat_id)
        sink = self._sink(chat_id)
        try:
            voice_url = await self.adapter.resolve_file_url(msg.voice.file_id)
        except TransportError as e:
            logger.error("Error processing voice message: %s", e)
            await notify(sink, VOICE_FAILURE_MESSAGE)
            return

        result = await self.transcription.transcribe(voice_url)
        if not result.ok:
            logger.warning("Transcription failed for chat %s: %s", chat_id, result.error)
            await notify(sink, TRANSCRIPTION_FAILED_MESSAGE)
            return
        await self.orchestrator.handle(chat_id, TextEvent(text=result.text), sink)

    async def _on_file(
        self, update: Update, _context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        msg = update.effective_message
        if msg is None:
            return
        chat_id = str(msg.chat_id)
        sink = self._sink(chat_id)
        if msg.photo:
            # largest rendition comes last
            file_id = msg.photo[-1].file_id
        elif msg.document and is_supported_document(msg.document.mime_type):
            file_id = msg.document.file_id
        else:
            await notify(sink, UNSUPPORTED_FILE_MESSAGE)
            return

        try:
            file_url = await self.adapter.resolve_file_url(file_id)
        except TransportError as e:
            logger.error("Error while processing file: %s", e)
            await notify(sink, FILE_FAILURE_MESSAGE)
            return
        await self.orchestrator.handle(chat_id, route_media(file_url), sink)

    async def _on_callback(
        self, update: Update, _context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        query = update.callback_query
        if query is None:
            return
        try:
            await query.answer()
        except TelegramError as e:
            logger.warning("Could not answer callback query: %s", e)

        chat = update.effective_chat
        chat_id = str(chat.id) if chat is not None else str(query.from_user.id)
        await self._relay(chat_id, ButtonSelectionEvent(token=query.data or ""))

    async def _on_error(
        self, update: object, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        logger.error("Unhandled error in Telegram handler", exc_info=context.error)
