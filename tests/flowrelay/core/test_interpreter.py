"""Tests for TraceInterpreter."""

import pytest

from conftest import RecordingSink, choice, speak
from flowrelay.core.errors import MalformedDirectiveError, TransportError
from flowrelay.core.interpreter import (
    END_OF_CONVERSATION_MESSAGE,
    OPTIONS_TITLE,
    TraceInterpreter,
)
from flowrelay.schemas.directives import Trace


def traces(*raw):
    return [Trace.model_validate(item) for item in raw]


@pytest.fixture
def interpreter(callback_registry, sleep):
    return TraceInterpreter(callback_registry, sleep=sleep)


@pytest.mark.asyncio
async def test_renders_in_order_with_delays(interpreter, sink, timeline):
    rendered = await interpreter.run(
        traces(
            speak("first", delay=250),
            {"type": "visual", "payload": {"image": "https://img/1.png", "delay": 50}},
            {"type": "end"},
        ),
        sink,
    )

    assert rendered == 3
    assert timeline == [
        ("sleep", 0.25),
        ("text", "first"),
        ("sleep", 0.05),
        ("image", "https://img/1.png"),
        ("sleep", 0.1),
        ("text", END_OF_CONVERSATION_MESSAGE),
    ]


@pytest.mark.asyncio
async def test_text_and_speak_both_send_message(interpreter, sink):
    await interpreter.run(
        traces({"type": "text", "payload": {"message": "a"}}, speak("b")), sink
    )
    assert sink.calls == [("text", "a"), ("text", "b")]


@pytest.mark.asyncio
async def test_choice_mints_one_token_per_option(interpreter, sink, callback_registry):
    r1 = {"type": "path-yes"}
    r2 = {"type": "path-no"}

    await interpreter.run(traces(choice(("Yes", r1), ("No", r2))), sink)

    [(kind, title, buttons)] = sink.calls
    assert (kind, title) == ("buttons", OPTIONS_TITLE)
    assert [b.label for b in buttons] == ["Yes", "No"]
    assert buttons[0].callback_data != buttons[1].callback_data
    assert callback_registry.consume(buttons[0].callback_data) == r1
    assert callback_registry.consume(buttons[1].callback_data) == r2


@pytest.mark.asyncio
async def test_end_does_not_stop_rendering(interpreter, sink):
    await interpreter.run(traces({"type": "end"}, speak("after")), sink)
    assert sink.calls == [("text", END_OF_CONVERSATION_MESSAGE), ("text", "after")]


@pytest.mark.asyncio
async def test_unknown_traces_render_nothing_but_keep_pacing(interpreter, sink, sleep):
    rendered = await interpreter.run(
        traces({"type": "path", "payload": {"path": "x"}}, speak("hello")), sink
    )
    assert rendered == 1
    assert sink.calls == [("text", "hello")]
    assert sleep.delays == [0.1, 0.1]


@pytest.mark.asyncio
async def test_malformed_directive_aborts_remaining(interpreter, sink):
    with pytest.raises(MalformedDirectiveError):
        await interpreter.run(
            traces(speak("ok"), {"type": "text", "payload": {}}, speak("never")),
            sink,
        )
    assert sink.calls == [("text", "ok")]


@pytest.mark.asyncio
async def test_sink_failure_aborts_remaining(callback_registry, sleep, timeline):
    sink = RecordingSink(timeline, fail_on=("image",))
    interpreter = TraceInterpreter(callback_registry, sleep=sleep)

    with pytest.raises(TransportError):
        await interpreter.run(
            traces(
                speak("before"),
                {"type": "visual", "payload": {"image": "https://img/x.png"}},
                speak("after"),
            ),
            sink,
        )
    assert sink.calls == [("text", "before")]
