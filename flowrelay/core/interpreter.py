from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from flowrelay.core.callback_registry import CallbackTokenRegistry
from flowrelay.core.sink import RenderSink
from flowrelay.schemas.directives import (
    ChoiceDirective,
    Directive,
    EndDirective,
    SpeakDirective,
    Trace,
    VisualDirective,
    to_directive,
)
from flowrelay.schemas.relay import OutboundButton

logger = logging.getLogger(__name__)

OPTIONS_TITLE = "Options:"
END_OF_CONVERSATION_MESSAGE = "End of the conversation"

Sleep = Callable[[float], Awaitable[None]]


class TraceInterpreter:
    """
    Render a dialogue engine response, one trace at a time and in order.

    Every trace is preceded by its pacing delay. Errors (a malformed trace or a
    failing sink) propagate and stop the remaining traces from rendering.
    """

    def __init__(
        self, registry: CallbackTokenRegistry, sleep: Sleep = asyncio.sleep
    ) -> None:
        self._registry = registry
        self._sleep = sleep

    async def run(self, traces: Sequence[Trace], sink: RenderSink) -> int:
        """Render all traces; return how many directives were rendered."""
        rendered = 0
        for trace in traces:
            await self._sleep(trace.delay_ms / 1000)
            directive = to_directive(trace)
            if directive is None:
                logger.debug("Skipping trace of type %s", trace.type)
                continue
            await self.render(directive, sink)
            rendered += 1
        return rendered

    async def render(self, directive: Directive, sink: RenderSink) -> None:
        if isinstance(directive, SpeakDirective):
            await sink.send_text(directive.text)
        elif isinstance(directive, VisualDirective):
            await sink.send_image(directive.image_url)
        elif isinstance(directive, ChoiceDirective):
            buttons = [
                OutboundButton(
                    label=option.label,
                    callback_data=self._registry.register(option.request),
                )
                for option in directive.options
            ]
            await sink.send_buttons(OPTIONS_TITLE, buttons)
        elif isinstance(directive, EndDirective):
            await sink.send_text(END_OF_CONVERSATION_MESSAGE)
