"""Platform adapters for chat integrations and external services."""

from flowrelay.adapters.base import BasePlatformAdapter
from flowrelay.adapters.telegram import TelegramAdapter

__all__ = ["BasePlatformAdapter", "TelegramAdapter"]
