"""
Base command for Telegram-related operations.

Provides a shared way to obtain the running Telegram plugin for use across
webhook commands.
"""

from __future__ import annotations

from typing import Optional

from flowrelay.channels.plugins.telegram import TelegramPlugin
from flowrelay.core.app_state import AppState


class BaseTelegramCommand:
    """
    Base for Telegram-related commands.
    Provides a shared way to obtain the running TelegramPlugin.
    """

    @staticmethod
    def get_telegram_plugin(state: Optional[AppState]) -> TelegramPlugin | None:
        """Return the running TelegramPlugin or None if Telegram is disabled or stopped."""
        if state is None:
            return None
        plugin = state.registry.get_channel(TelegramPlugin.id)
        if plugin is None or not plugin.running:
            return None
        return plugin
