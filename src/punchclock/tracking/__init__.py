"""Time tracking for punchclock.

Provides the punch in/out state machine over a log of events, range
totals, named periods, and JSON file persistence.
"""

from punchclock.tracking.errors import (
    AlreadyPunchedIn,
    AlreadyPunchedOut,
    LocationNotFound,
    NoPunchesRecorded,
    ParseFailure,
    PunchError,
    ReadFailure,
    SheetError,
    SheetNotFound,
    StorageError,
    WriteFailure,
)
from punchclock.tracking.formatting import format_duration, format_instant
from punchclock.tracking.period import Period
from punchclock.tracking.service import TimeTracker
from punchclock.tracking.sheet import Sheet
from punchclock.tracking.storage import SheetStorage, decode_sheet, encode_sheet
from punchclock.tracking.types import Event, SheetStatus, StatusKind

__all__ = [
    # Model
    "Event",
    "Sheet",
    "SheetStatus",
    "StatusKind",
    "Period",
    # Storage
    "SheetStorage",
    "encode_sheet",
    "decode_sheet",
    # Service
    "TimeTracker",
    # Formatting
    "format_duration",
    "format_instant",
    # Errors
    "SheetError",
    "PunchError",
    "AlreadyPunchedIn",
    "AlreadyPunchedOut",
    "NoPunchesRecorded",
    "StorageError",
    "LocationNotFound",
    "ReadFailure",
    "SheetNotFound",
    "ParseFailure",
    "WriteFailure",
]
