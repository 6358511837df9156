"""Webhook command handlers."""

from flowrelay.commands.base_telegram import BaseTelegramCommand
from flowrelay.commands.webhooks.telegram_command import TelegramWebhookCommand

__all__ = ["BaseTelegramCommand", "TelegramWebhookCommand"]
