"""Tests for the Reminder schema."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from flowrelay.schemas.reminder import Reminder, ReminderStatus

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_from_airtable_record():
    reminder = Reminder.from_record(
        {
            "id": "rec123",
            "createdTime": "2026-02-01T00:00:00.000Z",
            "fields": {
                "Due Time": "2026-03-01T11:59:00.000Z",
                "Reminder": "Take out the bins",
                "Status": "Pending",
            },
        }
    )
    assert reminder.id == "rec123"
    assert reminder.message == "Take out the bins"
    assert reminder.status == ReminderStatus.PENDING
    assert reminder.due_time == datetime(2026, 3, 1, 11, 59, tzinfo=timezone.utc)


def test_naive_due_time_is_utc():
    reminder = Reminder(id="r", due_time=datetime(2026, 3, 1, 12, 0), message="m")
    assert reminder.due_time.tzinfo == timezone.utc


def test_missing_due_time_raises_key_error():
    with pytest.raises(KeyError):
        Reminder.from_record({"id": "r", "fields": {"Reminder": "x"}})


def test_is_due():
    due = Reminder(id="a", due_time=NOW, message="now")
    future = Reminder(id="b", due_time=NOW + timedelta(seconds=1), message="later")
    sent = Reminder(
        id="c",
        due_time=NOW - timedelta(hours=1),
        message="done",
        status=ReminderStatus.SENT,
    )
    assert due.is_due(NOW) is True
    assert future.is_due(NOW) is False
    assert sent.is_due(NOW) is False


@pytest.mark.parametrize("fields", [{}, {"Reminder": ""}, {"Reminder": "   "}])
def test_record_without_message_is_rejected(fields):
    with pytest.raises(ValidationError):
        Reminder.from_record(
            {"id": "r", "fields": {"Due Time": "2026-03-01T11:59:00.000Z", **fields}}
        )
