"""
Relay orchestrator.

One call per inbound chat event: turn the event into a dialogue request,
send it to the dialogue engine and render the traces that come back. Nothing
is kept between calls except the callback tokens held by the registry.
"""

from __future__ import annotations

import logging

from flowrelay.adapters.dialogue_engine import DialogueEngineClient
from flowrelay.core.callback_registry import CallbackTokenRegistry
from flowrelay.core.errors import InvalidSelection, RelayError, TransportError
from flowrelay.core.interpreter import TraceInterpreter
from flowrelay.core.sink import RenderSink
from flowrelay.schemas.relay import (
    ButtonSelectionEvent,
    DialogueRequest,
    InboundEvent,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An error occurred while processing your request."
INVALID_SELECTION_MESSAGE = "Invalid selection, please try again."


class RelayOrchestrator:
    def __init__(
        self,
        engine: DialogueEngineClient,
        interpreter: TraceInterpreter,
        registry: CallbackTokenRegistry,
    ) -> None:
        self._engine = engine
        self._interpreter = interpreter
        self._registry = registry

    def to_request(self, event: InboundEvent) -> DialogueRequest:
        """Raises InvalidSelection for unknown or reused button tokens."""
        if isinstance(event, ButtonSelectionEvent):
            return self._registry.consume(event.token)
        return event.to_request()

    async def handle(self, chat_id: str, event: InboundEvent, sink: RenderSink) -> bool:
        """
        Relay one event for ``chat_id`` and render the response into ``sink``.

        Never raises; failures are logged and reported to the user with a
        single message. Returns True when the full response was rendered.
        """
        try:
            request = self.to_request(event)
        except InvalidSelection as e:
            logger.info("Chat %s pressed a stale button: %s", chat_id, e.token)
            await notify(sink, INVALID_SELECTION_MESSAGE)
            return False

        try:
            traces = await self._engine.interact(chat_id, request)
            rendered = await self._interpreter.run(traces, sink)
        except RelayError as e:
            logger.error("Relay failed for chat %s: %s", chat_id, e)
            await notify(sink, GENERIC_FAILURE_MESSAGE)
            return False
        except Exception:
            logger.exception("Unexpected error while relaying for chat %s", chat_id)
            await notify(sink, GENERIC_FAILURE_MESSAGE)
            return False

        logger.info(
            "Relayed %s event for chat %s (%d directives)",
            event.kind,
            chat_id,
            rendered,
        )
        return True


async def notify(sink: RenderSink, text: str) -> None:
    """Best-effort user notice; a dead channel is logged, not raised."""
    try:
        await sink.send_text(text)
    except TransportError as e:
        logger.error("Could not deliver notice %r: %s", text, e)
