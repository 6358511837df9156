"""Process-wide wiring of the relay components."""

from __future__ import annotations

from typing import Optional

from flowrelay.adapters.base import BasePlatformAdapter
from flowrelay.adapters.dialogue_engine import (
    DialogueEngineClient,
    build_dialogue_engine_client,
)
from flowrelay.adapters.reminder_store import AirtableReminderStore
from flowrelay.adapters.speech import build_speech_client
from flowrelay.channels.plugins.telegram import TelegramConfig, TelegramPlugin
from flowrelay.commands.send_notification_command import SendNotificationCommand
from flowrelay.config import Settings, get_settings
from flowrelay.core.callback_registry import CallbackTokenRegistry
from flowrelay.core.interpreter import TraceInterpreter
from flowrelay.core.orchestrator import RelayOrchestrator
from flowrelay.core.registry import PluginRegistry
from flowrelay.infra.logging_config import get_logger
from flowrelay.schemas.relay import Channel
from flowrelay.services.reminder_poller import ReminderPoller
from flowrelay.services.transcription_service import TranscriptionService

logger = get_logger("app_state")


class AppState:
    """Owns the long-lived components and their start/stop order."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.registry = PluginRegistry()
        self.callback_registry = CallbackTokenRegistry()
        self.engine: DialogueEngineClient = build_dialogue_engine_client(self.settings)
        self.orchestrator = RelayOrchestrator(
            engine=self.engine,
            interpreter=TraceInterpreter(self.callback_registry),
            registry=self.callback_registry,
        )
        self.transcription = TranscriptionService(build_speech_client(self.settings))
        self.poller: Optional[ReminderPoller] = None

        if self.settings.telegram_enabled and self.settings.telegram_bot_token:
            self.registry.register_channel(
                TelegramPlugin(
                    TelegramConfig(
                        bot_token=self.settings.telegram_bot_token,
                        mode=self.settings.telegram_mode,
                        webhook_url=self.settings.telegram_webhook_url,
                        webhook_secret=self.settings.telegram_webhook_secret,
                    ),
                    orchestrator=self.orchestrator,
                    transcription=self.transcription,
                )
            )
        else:
            logger.warning("Telegram is disabled; no chat channel will be served.")

    def adapters(self) -> dict[Channel, BasePlatformAdapter]:
        """Adapters of registered channels, keyed by channel."""
        return {
            Channel(plugin.id): plugin.adapter
            for plugin in self.registry.list_channels()
        }

    def build_poller(self) -> Optional[ReminderPoller]:
        settings = self.settings
        if not settings.reminders_configured:
            if settings.reminders_enabled:
                logger.warning(
                    "REMINDERS_ENABLED is set but the Airtable credentials or "
                    "NOTIFICATION_CHAT_ID are missing; reminders are off."
                )
            return None
        store = AirtableReminderStore(
            api_key=settings.airtable_api_key,
            base_id=settings.airtable_base_id,
            table=settings.airtable_table,
            api_url=settings.airtable_api_url,
        )
        return ReminderPoller(
            store=store,
            notifier=SendNotificationCommand(self.adapters()),
            chat_id=settings.notification_chat_id,
            interval_seconds=settings.reminder_poll_interval_seconds,
        )

    async def start(self) -> None:
        await self.registry.start_all()
        self.poller = self.build_poller()
        if self.poller is not None:
            self.poller.start()

    async def stop(self) -> None:
        if self.poller is not None:
            await self.poller.stop()
        await self.registry.stop_all()
        await self.engine.close()
