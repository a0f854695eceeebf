"""Time tracking service.

Composes sheet storage with the punch state machine: the sheet is loaded
once, and written back after every successful punch.
"""

import logging
from datetime import datetime, timedelta

from punchclock.clock import Clock, system_clock
from punchclock.tracking.period import Period
from punchclock.tracking.sheet import Sheet
from punchclock.tracking.storage import SheetStorage
from punchclock.tracking.types import SheetStatus

logger = logging.getLogger(__name__)


class TimeTracker:
    """Service for punching in and out of a stored sheet.

    Example:
        tracker = TimeTracker(SheetStorage("/tmp/sheet.json"))
        tracker.punch_in()
        print(tracker.count_period(Period.TODAY))
    """

    def __init__(self, storage: SheetStorage | None = None, clock: Clock | None = None) -> None:
        """Initialize the tracker.

        Args:
            storage: Sheet storage (default: the configured location).
            clock: Source of the current instant (default: system clock).
        """
        self._storage = storage or SheetStorage()
        self._clock = clock or system_clock
        self._sheet: Sheet | None = None

    @property
    def storage(self) -> SheetStorage:
        return self._storage

    @property
    def sheet(self) -> Sheet:
        """The sheet, loaded from storage on first access."""
        if self._sheet is None:
            self._sheet = self._storage.load()
        return self._sheet

    def reload(self) -> Sheet:
        """Discard the in-memory sheet and load it again."""
        self._sheet = None
        return self.sheet

    def save(self) -> None:
        """Write the in-memory sheet back to storage."""
        self._storage.save(self.sheet)

    def _commit(self, sheet: Sheet) -> None:
        """Save a punched copy, adopting it only once it is stored."""
        self._storage.save(sheet)
        self._sheet = sheet

    def now(self) -> datetime:
        return self._clock.now()

    def punch_in(self, at: datetime | None = None) -> datetime:
        """Punch in at ``at`` (default: now) and save.

        Raises:
            AlreadyPunchedIn: If already punched in; nothing is saved.
            WriteFailure: If the punched sheet cannot be saved; the
                in-memory sheet is left unchanged.
        """
        sheet = self.sheet.model_copy(deep=True)
        started = sheet.punch_in_at(at if at is not None else self.now())
        self._commit(sheet)
        logger.info(f"Punched in at {started.isoformat()}")
        return started

    def punch_out(self, at: datetime | None = None) -> datetime:
        """Punch out at ``at`` (default: now) and save.

        Raises:
            AlreadyPunchedOut: If already punched out; nothing is saved.
            NoPunchesRecorded: If the sheet is empty; nothing is saved.
            WriteFailure: If the punched sheet cannot be saved; the
                in-memory sheet is left unchanged.
        """
        sheet = self.sheet.model_copy(deep=True)
        stopped = sheet.punch_out_at(at if at is not None else self.now())
        self._commit(sheet)
        logger.info(f"Punched out at {stopped.isoformat()}")
        return stopped

    def status(self) -> SheetStatus:
        return self.sheet.status()

    def count_range(self, begin: datetime, end: datetime) -> timedelta:
        return self.sheet.count_range(begin, end, now=self.now())

    def count_period(self, period: Period) -> timedelta:
        return self.sheet.count_period(period, now=self.now())
