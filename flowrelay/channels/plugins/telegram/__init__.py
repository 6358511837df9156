"""Telegram channel plugin."""

from .config import TelegramConfig
from .plugin import TelegramPlugin

__all__ = ["TelegramConfig", "TelegramPlugin"]
