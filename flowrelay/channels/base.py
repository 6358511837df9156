from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from flowrelay.adapters.base import BasePlatformAdapter


@dataclass(frozen=True)
class ChannelMeta:
    label: str
    docs: Optional[str] = None


@dataclass(frozen=True)
class ChannelCapabilities:
    chat_types: list[str]
    supports_webhook: bool = False
    supports_polling: bool = False
    supports_buttons: bool = False
    supports_voice: bool = False
    supports_media: bool = False


class ChannelPlugin(Protocol):
    id: str
    meta: ChannelMeta
    capabilities: ChannelCapabilities
    adapter: BasePlatformAdapter

    @property
    def running(self) -> bool: ...

    async def start(self) -> None: ...
    async def stop(self) -> None: ...

    async def process_webhook_update(self, payload: dict[str, Any]) -> None: ...
