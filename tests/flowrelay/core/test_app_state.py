"""Tests for AppState wiring."""

import pytest

from flowrelay.channels.plugins.telegram import TelegramPlugin
from flowrelay.config import Settings
from flowrelay.core.app_state import AppState
from flowrelay.schemas.relay import Channel

FAKE_TOKEN = "123456:AAHdqTcvCH1vGWJxfSeofSAs0K5P"


def settings(**overrides) -> Settings:
    return Settings.model_construct(**overrides)


@pytest.mark.asyncio
async def test_telegram_disabled_registers_no_channel():
    state = AppState(settings(telegram_enabled=False))

    assert state.registry.list_channels() == []
    assert state.adapters() == {}
    assert state.build_poller() is None
    await state.engine.close()


@pytest.mark.asyncio
async def test_telegram_enabled_registers_plugin():
    state = AppState(
        settings(telegram_enabled=True, telegram_bot_token=FAKE_TOKEN)
    )

    plugin = state.registry.get_channel("telegram")
    assert isinstance(plugin, TelegramPlugin)
    assert plugin.orchestrator is state.orchestrator
    assert state.adapters() == {Channel.TELEGRAM: plugin.adapter}
    await state.engine.close()


@pytest.mark.asyncio
async def test_poller_needs_full_reminder_config():
    partial = AppState(
        settings(reminders_enabled=True, airtable_api_key="key", airtable_base_id=None)
    )
    assert partial.build_poller() is None
    await partial.engine.close()

    full = AppState(
        settings(
            telegram_enabled=True,
            telegram_bot_token=FAKE_TOKEN,
            reminders_enabled=True,
            airtable_api_key="key",
            airtable_base_id="appBASE",
            notification_chat_id="999",
            reminder_poll_interval_seconds=5.0,
        )
    )
    poller = full.build_poller()
    assert poller is not None
    assert not poller.running
    await full.engine.close()
