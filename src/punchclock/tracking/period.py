"""Named calendar periods over which tracked time can be counted.

Periods are computed on the UTC calendar. Weeks begin on Monday. The current
period ends at ``now``; past periods end where the following one begins.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum

from punchclock.clock import to_utc

BEGINNING_OF_TIME = datetime.min.replace(tzinfo=timezone.utc)


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _start_of_month(moment: datetime) -> datetime:
    return _start_of_day(moment).replace(day=1)


class Period(str, Enum):
    """A named window of time relative to now.

    Attributes:
        TODAY: Since midnight.
        YESTERDAY: The whole previous day.
        WEEK: Since Monday.
        LAST_WEEK: The whole previous Monday-to-Sunday week.
        MONTH: Since the first of the month.
        LAST_MONTH: The whole previous month.
        YEAR: Since the first of January.
        ALL: Everything ever recorded.
    """

    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    LAST_WEEK = "last_week"
    MONTH = "month"
    LAST_MONTH = "last_month"
    YEAR = "year"
    ALL = "all"

    @classmethod
    def parse(cls, text: str) -> "Period":
        """Parse a period name such as ``"today"`` or ``"last-week"``.

        Raises:
            ValueError: If the name is not a known period.
        """
        normalised = text.strip().lower().replace("-", "_")
        try:
            return cls(normalised)
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"unknown period '{text}' (expected one of: {choices})") from None

    def bounds(self, now: datetime) -> tuple[datetime, datetime]:
        """Compute the ``(begin, end)`` instants of this period.

        Args:
            now: The current instant.

        Returns:
            Tuple of UTC instants delimiting the period.
        """
        now = to_utc(now)
        today = _start_of_day(now)

        if self is Period.TODAY:
            return today, now
        if self is Period.YESTERDAY:
            return today - timedelta(days=1), today

        this_week = today - timedelta(days=today.weekday())
        if self is Period.WEEK:
            return this_week, now
        if self is Period.LAST_WEEK:
            return this_week - timedelta(weeks=1), this_week

        this_month = _start_of_month(now)
        if self is Period.MONTH:
            return this_month, now
        if self is Period.LAST_MONTH:
            return _start_of_month(this_month - timedelta(days=1)), this_month

        if self is Period.YEAR:
            return this_month.replace(month=1), now

        return BEGINNING_OF_TIME, now

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"last week"``."""
        return self.value.replace("_", " ")
