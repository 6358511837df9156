"""Reminder records as stored in the external reminder table."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, field_validator

DUE_TIME_FIELD = "Due Time"
MESSAGE_FIELD = "Reminder"
STATUS_FIELD = "Status"


class ReminderStatus(str, Enum):
    PENDING = "Pending"
    SENT = "Sent"


class Reminder(BaseModel):
    """A reminder row. The relay only ever moves it from Pending to Sent."""

    id: str
    due_time: datetime
    message: str
    status: ReminderStatus = ReminderStatus.PENDING

    @field_validator("due_time")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value

    @field_validator("message")
    @classmethod
    def _require_text(cls, value: str) -> str:
        # Telegram rejects empty text
        if not value.strip():
            raise ValueError("reminder message is empty")
        return value

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Reminder":
        """Build from an Airtable record ``{id, fields: {...}}``."""
        fields = record.get("fields") or {}
        return cls(
            id=record["id"],
            due_time=fields[DUE_TIME_FIELD],
            message=fields.get(MESSAGE_FIELD) or "",
            status=fields.get(STATUS_FIELD, ReminderStatus.PENDING.value),
        )

    def is_due(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.status == ReminderStatus.PENDING and self.due_time <= now
