from flowrelay.services.reminder_poller import ReminderPoller
from flowrelay.services.transcription_service import (
    TranscriptionResult,
    TranscriptionService,
)

__all__ = [
    "ReminderPoller",
    "TranscriptionResult",
    "TranscriptionService",
]
