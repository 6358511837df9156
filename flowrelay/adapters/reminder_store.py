"""Airtable-backed reminder store."""

from __future__ import annotations

from typing import Any, Optional

import requests
from pydantic import ValidationError

from flowrelay.core.errors import ReminderStoreError, ReminderSyncError
from flowrelay.infra.logging_config import get_logger
from flowrelay.schemas.reminder import STATUS_FIELD, Reminder, ReminderStatus

logger = get_logger("reminder_store")

PENDING_FORMULA = "{Status} = 'Pending'"
TIMEOUT_SECONDS = 30


class AirtableReminderStore:
    """
    Lists pending reminders and flips them to Sent.

    Blocking (requests); callers on the event loop run it in a worker thread.
    """

    def __init__(
        self,
        api_key: str,
        base_id: str,
        table: str = "Reminders",
        api_url: str = "https://api.airtable.com/v0",
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._table_url = f"{api_url.rstrip('/')}/{base_id}/{table}"
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    def list_pending(self) -> list[Reminder]:
        """
        Return all Pending reminders, following Airtable's pagination offset.

        Records that cannot be parsed (missing due time, bad date) are skipped.
        """
        reminders: list[Reminder] = []
        params: dict[str, Any] = {"filterByFormula": PENDING_FORMULA}
        while True:
            try:
                resp = self._session.get(
                    self._table_url,
                    params=params,
                    headers=self._headers(),
                    timeout=TIMEOUT_SECONDS,
                )
            except requests.RequestException as e:
                raise ReminderStoreError(f"Listing reminders failed: {e}") from e
            if resp.status_code != 200:
                raise ReminderStoreError(
                    f"HTTP {resp.status_code}: {resp.text[:500] if resp.text else 'no body'}"
                )
            try:
                data = resp.json()
            except ValueError as e:
                raise ReminderStoreError(f"Invalid JSON: {e}") from e

            for record in data.get("records", []):
                try:
                    reminders.append(Reminder.from_record(record))
                except (KeyError, ValidationError) as e:
                    logger.warning(
                        "Skipping unreadable reminder %s: %s", record.get("id"), e
                    )

            offset = data.get("offset")
            if not offset:
                return reminders
            params = {"filterByFormula": PENDING_FORMULA, "offset": offset}

    def mark_sent(self, reminder_id: str) -> None:
        try:
            resp = self._session.patch(
                f"{self._table_url}/{reminder_id}",
                json={"fields": {STATUS_FIELD: ReminderStatus.SENT.value}},
                headers=self._headers(),
                timeout=TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise ReminderSyncError(reminder_id, str(e)) from e
        if resp.status_code != 200:
            raise ReminderSyncError(reminder_id, f"HTTP {resp.status_code}")
