"""Type definitions for time tracking.

This module defines the Pydantic models for recorded events and the
derived tracking status of a sheet.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from punchclock.clock import to_utc


class Event(BaseModel):
    """A (possibly ongoing) period of time tracking.

    Attributes:
        start: The start of the tracked period.
        stop: The end of the tracked period, or None while it is ongoing.
    """

    model_config = ConfigDict(validate_assignment=True)

    start: datetime = Field(..., description="Start of the tracked period")
    stop: datetime | None = Field(
        default=None,
        description="End of the tracked period (null while ongoing)",
    )

    @field_validator("start", "stop")
    @classmethod
    def _normalise_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        try:
            return to_utc(value)
        except OverflowError as e:
            raise ValueError(f"instant out of range in UTC: {value.isoformat()}") from e

    @classmethod
    def new(cls, start: datetime) -> "Event":
        """Create a new open event starting at the given instant."""
        return cls(start=start)

    @property
    def is_open(self) -> bool:
        """Whether the event has not been punched out yet."""
        return self.stop is None

    def effective_stop(self, now: datetime) -> datetime:
        """Return the stop instant, treating an open event as running until ``now``."""
        return self.stop if self.stop is not None else now


class StatusKind(str, Enum):
    """Whether or not time is currently being tracked.

    Attributes:
        EMPTY: No time has ever been tracked.
        PUNCHED_IN: Time is being tracked since the status instant.
        PUNCHED_OUT: Time is not being tracked as of the status instant.
    """

    EMPTY = "empty"
    PUNCHED_IN = "punched_in"
    PUNCHED_OUT = "punched_out"


class SheetStatus(BaseModel):
    """Tracking status of a sheet, with the instant it last changed."""

    model_config = ConfigDict(frozen=True)

    kind: StatusKind
    since: datetime | None = None

    def model_post_init(self, __context: Any) -> None:
        """Validate that ``since`` is set exactly when the sheet is non-empty."""
        if self.kind == StatusKind.EMPTY and self.since is not None:
            raise ValueError("since must be None for an empty sheet")
        if self.kind != StatusKind.EMPTY and self.since is None:
            raise ValueError(f"since is required for status '{self.kind.value}'")

    @classmethod
    def empty(cls) -> "SheetStatus":
        return cls(kind=StatusKind.EMPTY)

    @classmethod
    def punched_in(cls, since: datetime) -> "SheetStatus":
        return cls(kind=StatusKind.PUNCHED_IN, since=since)

    @classmethod
    def punched_out(cls, since: datetime) -> "SheetStatus":
        return cls(kind=StatusKind.PUNCHED_OUT, since=since)
