"""Render sinks: where the interpreter sends what it renders for one chat."""

from __future__ import annotations

from typing import Protocol

from flowrelay.adapters.base import BasePlatformAdapter
from flowrelay.core.errors import TransportError
from flowrelay.schemas.relay import (
    Channel,
    OutboundButton,
    OutboundMessage,
    OutboundSendResult,
)


class RenderSink(Protocol):
    async def send_text(self, text: str) -> None: ...
    async def send_image(self, url: str) -> None: ...
    async def send_buttons(self, title: str, buttons: list[OutboundButton]) -> None: ...


class ChannelRenderSink:
    """RenderSink for one chat, backed by a platform adapter."""

    def __init__(
        self, adapter: BasePlatformAdapter, channel: Channel, chat_id: str
    ) -> None:
        self._adapter = adapter
        self.channel = channel
        self.chat_id = chat_id

    async def send_text(self, text: str) -> None:
        await self._send(
            OutboundMessage(channel=self.channel, chat_id=self.chat_id, text=text)
        )

    async def send_image(self, url: str) -> None:
        await self._send(
            OutboundMessage(channel=self.channel, chat_id=self.chat_id, image_url=url)
        )

    async def send_buttons(self, title: str, buttons: list[OutboundButton]) -> None:
        await self._send(
            OutboundMessage(
                channel=self.channel,
                chat_id=self.chat_id,
                text=title,
                buttons=buttons,
            )
        )

    async def _send(self, outbound: OutboundMessage) -> OutboundSendResult:
        result = await self._adapter.send(outbound)
        if not result.success:
            raise TransportError(
                f"{self.channel.value} refused message for chat {self.chat_id}"
            )
        return result
