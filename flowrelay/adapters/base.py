"""
Platform adapter interface.

Adapters encapsulate platform-specific logic: sending normalized outbound
messages and turning received files into fetchable URLs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from flowrelay.schemas.relay import OutboundMessage, OutboundSendResult


class BasePlatformAdapter(ABC):
    """Contract for platform adapters. New platforms implement this interface."""

    @abstractmethod
    async def send(self, outbound: OutboundMessage) -> OutboundSendResult:
        """Send normalized outbound message via platform API. Raise TransportError on API failure."""
        ...

    @abstractmethod
    async def resolve_file_url(self, file_id: str) -> str:
        """Return a URL the dialogue engine (or we) can download the file from."""
        ...

    def verify_webhook(
        self, secret: Optional[str], request_headers: Optional[dict[str, str]] = None
    ) -> bool:
        """
        Verify webhook request (e.g. secret token). Override if platform supports it.
        Return True if valid or verification not required; False to reject.
        """
        return True
