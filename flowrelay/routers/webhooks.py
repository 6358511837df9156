"""
Webhook routes for inbound chat platform updates.

Platforms POST raw updates here; we verify, queue and return 200.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from flowrelay.commands.webhooks import TelegramWebhookCommand

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/telegram")
async def telegram_webhook(request: Request) -> dict[str, str]:
    """
    Receive Telegram webhook updates (TELEGRAM_MODE=webhook).
    Validate X-Telegram-Bot-Api-Secret-Token if TELEGRAM_WEBHOOK_SECRET is set.
    """
    state = getattr(request.app.state, "relay", None)
    return await TelegramWebhookCommand(state).execute(request)
