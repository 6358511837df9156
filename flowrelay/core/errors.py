"""Error taxonomy for the relay.

Everything raised here is caught at the event-handling boundary (the
orchestrator, the channel plugin handlers or the reminder poller) and turned
into a log line and, where a user is waiting, a single chat message.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base class for relay failures."""


class TransportError(RelayError):
    """A chat transport call failed (send, file lookup, ...)."""


class EngineError(RelayError):
    """The dialogue engine was unreachable, answered non-2xx or sent a bad body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedDirectiveError(RelayError):
    """A trace of a known type is missing the fields needed to render it."""


class TranscriptionError(RelayError):
    """Downloading or transcribing a voice message failed."""


class InvalidSelection(RelayError):
    """A button token is unknown or was already used."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown or already used callback token: {token!r}")
        self.token = token


class ReminderStoreError(RelayError):
    """Listing reminders from the store failed."""


class ReminderSyncError(RelayError):
    """Marking a delivered reminder as sent failed."""

    def __init__(self, reminder_id: str, reason: str) -> None:
        super().__init__(f"Failed to mark reminder {reminder_id} as sent: {reason}")
        self.reminder_id = reminder_id
