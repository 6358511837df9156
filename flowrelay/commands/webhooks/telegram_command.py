"""
Command to handle Telegram webhook updates.

Receives raw webhook data, validates the secret, checks the update shape and
hands it to the running Telegram plugin, which processes it in the background.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import HTTPException, Request
from pydantic import ValidationError

from flowrelay.commands.base_telegram import BaseTelegramCommand
from flowrelay.config import get_settings
from flowrelay.core.app_state import AppState
from flowrelay.schemas.telegram import TelegramWebhookUpdate


class TelegramWebhookCommand(BaseTelegramCommand):
    """
    Command to handle Telegram webhook updates.
    Validates X-Telegram-Bot-Api-Secret-Token, parses the update, queues it.
    """

    def __init__(self, state: Optional[AppState]) -> None:
        self.settings = get_settings()
        self._plugin = self.get_telegram_plugin(state)
        self.logger = logging.getLogger(__name__)

    async def execute(self, request: Request) -> dict[str, str]:
        """
        Execute the Telegram webhook: validate secret, parse body, queue update.

        Args:
            request: The incoming webhook request (headers for secret validation).

        Returns:
            dict: {"status": "ok"} on success.

        Raises:
            HTTPException: 503 if Telegram not configured or not running,
                403 on invalid secret, 400 on invalid JSON or Telegram update.
        """
        if self._plugin is None:
            raise HTTPException(
                status_code=503,
                detail="Telegram integration is not configured or disabled",
            )
        headers = dict(request.headers) if request.headers else {}
        if not self._plugin.adapter.verify_webhook(
            self.settings.telegram_webhook_secret, headers
        ):
            raise HTTPException(status_code=403, detail="Invalid webhook secret")

        try:
            body: Any = await request.json()
        except ValueError as e:
            self.logger.warning("Telegram webhook invalid JSON: %s", e)
            raise HTTPException(status_code=400, detail="Invalid JSON body") from e
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="Body must be a JSON object")

        try:
            update = TelegramWebhookUpdate.model_validate(body)
            await self._plugin.process_webhook_update(body)
        except (ValidationError, ValueError, KeyError, TypeError) as e:
            self.logger.warning("Telegram webhook parse error: %s", e)
            raise HTTPException(
                status_code=400, detail="Invalid Telegram update"
            ) from e

        self.logger.info(
            "Telegram webhook update %s queued for chat %s",
            update.update_id,
            update.chat_id,
        )
        return {"status": "ok"}
