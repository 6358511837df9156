from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class TelegramConfig:
    bot_token: str
    mode: str = "polling"  # polling | webhook
    webhook_url: Optional[str] = None
    webhook_secret: Optional[str] = None
    webhook_path: str = "/webhooks/telegram"
