"""Working with recorded timesheets (lists of events)."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from punchclock.clock import Clock, system_clock, to_utc
from punchclock.tracking.errors import AlreadyPunchedIn, AlreadyPunchedOut, NoPunchesRecorded
from punchclock.tracking.types import Event, SheetStatus

if TYPE_CHECKING:
    from punchclock.tracking.period import Period


class Sheet(BaseModel):
    """List of events, together comprising a log of work from which totals
    can be calculated for various periods of time.

    Only the last event may be open. Status is always derived from the tail
    of the log rather than stored.

    Example:
        sheet = Sheet()
        sheet.punch_in_at(start)
        sheet.punch_out_at(start + timedelta(hours=2))
        sheet.count_range(start, start + timedelta(hours=1))  # 1 hour
    """

    events: list[Event] = Field(default_factory=list, description="Recorded events, in log order")

    @property
    def current_event(self) -> Event | None:
        """The open event at the tail of the log, if there is one."""
        if self.events and self.events[-1].is_open:
            return self.events[-1]
        return None

    def punch_in(self, clock: Clock | None = None) -> datetime:
        """Record a punch-in at the current time."""
        return self.punch_in_at((clock or system_clock).now())

    def punch_in_at(self, time: datetime) -> datetime:
        """Record a punch-in (start of a time-tracking period) at the given time.

        Args:
            time: Instant the tracked period starts.

        Returns:
            The recorded start instant.

        Raises:
            AlreadyPunchedIn: If the last event is still open.
        """
        current = self.current_event
        if current is not None:
            raise AlreadyPunchedIn(current.start)

        event = Event.new(time)
        self.events.append(event)
        return event.start

    def punch_out(self, clock: Clock | None = None) -> datetime:
        """Record a punch-out at the current time."""
        return self.punch_out_at((clock or system_clock).now())

    def punch_out_at(self, time: datetime) -> datetime:
        """Record a punch-out (end of a time-tracking period) at the given time.

        Args:
            time: Instant the tracked period stops.

        Returns:
            The recorded stop instant.

        Raises:
            NoPunchesRecorded: If the sheet has no events.
            AlreadyPunchedOut: If the last event is already closed.
        """
        if not self.events:
            raise NoPunchesRecorded()

        last = self.events[-1]
        if last.stop is not None:
            raise AlreadyPunchedOut(last.stop)

        last.stop = time
        return last.stop

    def status(self) -> SheetStatus:
        """Get the current status of time-tracking, including the time at
        which the status last changed."""
        if not self.events:
            return SheetStatus.empty()

        last = self.events[-1]
        if last.stop is not None:
            return SheetStatus.punched_out(last.stop)
        return SheetStatus.punched_in(last.start)

    def count_range(
        self,
        begin: datetime,
        end: datetime,
        now: datetime | None = None,
    ) -> timedelta:
        """Count the time with recorded work between two instants.

        An ongoing event counts as running until ``now``. Events entirely
        before ``begin`` or entirely after ``end`` contribute nothing; all
        others are clamped to the range. A reversed range is not rejected.

        Args:
            begin: Start of the range.
            end: End of the range.
            now: Current instant (defaults to the system clock).

        Returns:
            Total overlapping duration.
        """
        begin = to_utc(begin)
        end = to_utc(end)
        now = to_utc(now) if now is not None else system_clock.now()

        total = timedelta(0)
        for event in self.events:
            start = event.start
            stop = event.effective_stop(now)

            entirely_before = start < begin and stop < begin
            entirely_after = start > end and stop > end
            if entirely_before or entirely_after:
                continue

            total += min(end, stop) - max(begin, start)

        return total

    def count_period(self, period: Period, now: datetime | None = None) -> timedelta:
        """Count the time with recorded work during a named period."""
        now = to_utc(now) if now is not None else system_clock.now()
        begin, end = period.bounds(now)
        return self.count_range(begin, end, now=now)
