"""
Dialogue engine response contracts.

The engine answers every interaction with an ordered list of traces
(``{type, payload, delay?}``). ``Trace`` is the loose wire shape; ``Directive``
is the closed set of things the relay knows how to render, each variant
carrying only its own fields.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flowrelay.core.errors import MalformedDirectiveError
from flowrelay.schemas.relay import DialogueRequest

DEFAULT_DELAY_MS = 100


class Trace(BaseModel):
    """One raw element of a dialogue engine response."""

    model_config = ConfigDict(extra="allow")

    type: str
    payload: Optional[Any] = None
    delay: Optional[float] = None

    @property
    def delay_ms(self) -> int:
        """Pacing delay: top-level ``delay``, else ``payload.delay``, else the default."""
        if self.delay is not None:
            return int(max(self.delay, 0))
        if isinstance(self.payload, dict):
            payload_delay = self.payload.get("delay")
            if isinstance(payload_delay, (int, float)) and payload_delay > 0:
                return int(payload_delay)
        return DEFAULT_DELAY_MS


class SpeakDirective(BaseModel):
    kind: Literal["speak"] = "speak"
    text: str
    delay_ms: int = DEFAULT_DELAY_MS


class VisualDirective(BaseModel):
    kind: Literal["visual"] = "visual"
    image_url: str
    delay_ms: int = DEFAULT_DELAY_MS


class ChoiceOption(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str = Field(validation_alias="name")
    request: DialogueRequest


class ChoiceDirective(BaseModel):
    kind: Literal["choice"] = "choice"
    options: list[ChoiceOption]
    delay_ms: int = DEFAULT_DELAY_MS


class EndDirective(BaseModel):
    kind: Literal["end"] = "end"
    delay_ms: int = DEFAULT_DELAY_MS


Directive = Union[SpeakDirective, VisualDirective, ChoiceDirective, EndDirective]


def _payload(trace: Trace) -> dict[str, Any]:
    if not isinstance(trace.payload, dict):
        raise MalformedDirectiveError(
            f"Trace of type {trace.type!r} has no payload object"
        )
    return trace.payload


def _speak(trace: Trace) -> SpeakDirective:
    message = _payload(trace).get("message")
    if not isinstance(message, str):
        raise MalformedDirectiveError(f"{trace.type!r} trace has no message")
    return SpeakDirective(text=message, delay_ms=trace.delay_ms)


def _visual(trace: Trace) -> VisualDirective:
    image = _payload(trace).get("image")
    if not isinstance(image, str) or not image:
        raise MalformedDirectiveError("visual trace has no image")
    return VisualDirective(image_url=image, delay_ms=trace.delay_ms)


def _choice(trace: Trace) -> ChoiceDirective:
    buttons = _payload(trace).get("buttons")
    if not isinstance(buttons, list):
        raise MalformedDirectiveError("choice trace has no buttons")
    try:
        options = [ChoiceOption.model_validate(button) for button in buttons]
    except ValidationError as e:
        raise MalformedDirectiveError(f"choice trace has an invalid button: {e}") from e
    return ChoiceDirective(options=options, delay_ms=trace.delay_ms)


def _end(trace: Trace) -> EndDirective:
    return EndDirective(delay_ms=trace.delay_ms)


_DIRECTIVE_PARSERS = {
    "text": _speak,
    "speak": _speak,
    "visual": _visual,
    "choice": _choice,
    "end": _end,
}


def to_directive(trace: Trace) -> Optional[Directive]:
    """
    Convert a trace into a directive.

    Returns None for trace types the relay does not render (path, debug, ...).
    Raises MalformedDirectiveError when a known type lacks its fields.
    """
    parser = _DIRECTIVE_PARSERS.get(trace.type)
    if parser is None:
        return None
    return parser(trace)
