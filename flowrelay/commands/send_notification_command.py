"""
Command to push a message to a chat outside of any conversation turn.

Resolves adapter by channel and sends via platform API. Used for reminders.
"""

from __future__ import annotations

import logging
from typing import Optional

from flowrelay.adapters.base import BasePlatformAdapter
from flowrelay.core.errors import TransportError
from flowrelay.schemas.relay import Channel, OutboundMessage, OutboundSendResult

logger = logging.getLogger(__name__)


class SendNotificationCommand:
    """
    Command to send an outbound message to the specified channel.
    """

    def __init__(self, adapters: dict[Channel, BasePlatformAdapter]) -> None:
        self._adapters = adapters

    async def execute(self, body: OutboundMessage) -> Optional[str]:
        """
        Send the outbound message via the channel adapter.

        Args:
            body: Normalized outbound message (channel, chat, content).

        Returns:
            The platform message id, when the platform reports one.

        Raises:
            TransportError: if the channel is not enabled or the platform
                API failed to send.
        """
        adapter = self._adapters.get(body.channel)
        if adapter is None:
            raise TransportError(
                f"Channel {body.channel.value} is not enabled or not supported"
            )
        result: OutboundSendResult = await adapter.send(body)
        if not result.success:
            raise TransportError("Platform API failed to send message")
        logger.info("Notification sent to %s chat %s", body.channel.value, body.chat_id)
        return result.platform_message_id
