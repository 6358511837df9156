"""
Reminder poller.

Every period it lists Pending reminders, pushes the due ones to the
notification chat and marks them Sent. Delivery is at-least-once: a crash (or
a failed status update) between sending and marking means the reminder is
sent again on a later cycle.
"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from flowrelay.commands.send_notification_command import SendNotificationCommand
from flowrelay.core.errors import RelayError, ReminderSyncError
from flowrelay.infra.logging_config import get_logger
from flowrelay.schemas.relay import Channel, OutboundMessage
from flowrelay.schemas.reminder import Reminder

logger = get_logger("reminder_poller")

Clock = Callable[[], datetime]


class ReminderStore(Protocol):
    def list_pending(self) -> list[Reminder]: ...
    def mark_sent(self, reminder_id: str) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReminderPoller:
    def __init__(
        self,
        store: ReminderStore,
        notifier: SendNotificationCommand,
        chat_id: str,
        interval_seconds: float = 30.0,
        channel: Channel = Channel.TELEGRAM,
        clock: Clock = _utcnow,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._chat_id = chat_id
        self._interval = interval_seconds
        self._channel = channel
        self._clock = clock
        self._loop_task: Optional[asyncio.Task[None]] = None
        self._cycles: set[asyncio.Task[int]] = set()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def run_cycle(self) -> int:
        """Run one scan. Returns the number of reminders delivered."""
        now = self._clock()
        try:
            pending = await asyncio.to_thread(self._store.list_pending)
        except RelayError as e:
            logger.error("Failed to check reminders: %s", e)
            return 0

        due = [reminder for reminder in pending if reminder.is_due(now)]
        if not due:
            return 0

        results = await asyncio.gather(
            *(self._process(reminder) for reminder in due), return_exceptions=True
        )
        delivered = 0
        for reminder, result in zip(due, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Unexpected error processing reminder %s",
                    reminder.id,
                    exc_info=result,
                )
            elif result:
                delivered += 1
        logger.info("Delivered %d of %d due reminders", delivered, len(due))
        return delivered

    async def _process(self, reminder: Reminder) -> bool:
        outbound = OutboundMessage(
            channel=self._channel, chat_id=self._chat_id, text=reminder.message
        )
        try:
            await self._notifier.execute(outbound)
        except RelayError as e:
            # left Pending, retried next cycle
            logger.error("Failed to send reminder %s: %s", reminder.id, e)
            return False

        try:
            await asyncio.to_thread(self._store.mark_sent, reminder.id)
        except ReminderSyncError as e:
            logger.error("%s", e)
        return True

    def start(self) -> None:
        if self.running:
            return
        self._loop_task = asyncio.create_task(self._run_forever())
        logger.info("Reminder poller started (every %ss)", self._interval)

    async def stop(self) -> None:
        tasks = list(self._cycles)
        if self._loop_task is not None:
            tasks.append(self._loop_task)
            self._loop_task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("Reminder poller stopped")

    async def _run_forever(self) -> None:
        # a new cycle every period, whether or not the previous one finished
        while True:
            cycle = asyncio.create_task(self.run_cycle())
            self._cycles.add(cycle)
            cycle.add_done_callback(self._cycle_done)
            await asyncio.sleep(self._interval)

    def _cycle_done(self, task: asyncio.Task[int]) -> None:
        self._cycles.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Reminder cycle crashed", exc_info=exc)
