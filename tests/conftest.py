import os

os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402

from flowrelay.core.callback_registry import CallbackTokenRegistry  # noqa: E402
from flowrelay.core.errors import TransportError  # noqa: E402


class RecordingSink:
    """RenderSink that records what would have been sent, in order."""

    def __init__(self, timeline: list, fail_on: tuple[str, ...] = ()) -> None:
        self.timeline = timeline
        self.fail_on = fail_on

    @property
    def calls(self) -> list:
        return [entry for entry in self.timeline if entry[0] != "sleep"]

    def _record(self, kind: str, *values) -> None:
        if kind in self.fail_on:
            raise TransportError(f"{kind} channel gone")
        self.timeline.append((kind, *values))

    async def send_text(self, text: str) -> None:
        self._record("text", text)

    async def send_image(self, url: str) -> None:
        self._record("image", url)

    async def send_buttons(self, title: str, buttons) -> None:
        self._record("buttons", title, list(buttons))


class RecordingSleep:
    def __init__(self, timeline: list) -> None:
        self.timeline = timeline

    @property
    def delays(self) -> list[float]:
        return [entry[1] for entry in self.timeline if entry[0] == "sleep"]

    async def __call__(self, seconds: float) -> None:
        self.timeline.append(("sleep", seconds))


@pytest.fixture
def timeline() -> list:
    return []


@pytest.fixture
def sink(timeline) -> RecordingSink:
    return RecordingSink(timeline)


@pytest.fixture
def sleep(timeline) -> RecordingSleep:
    return RecordingSleep(timeline)


@pytest.fixture
def callback_registry() -> CallbackTokenRegistry:
    return CallbackTokenRegistry()


def speak(message: str, **extra) -> dict:
    return {"type": "speak", "payload": {"message": message}, **extra}


def choice(*buttons: tuple[str, dict]) -> dict:
    return {
        "type": "choice",
        "payload": {
            "buttons": [{"name": name, "request": request} for name, request in buttons]
        },
    }
