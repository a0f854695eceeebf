"""Errors arising through the use of a sheet and its storage."""

from datetime import datetime


class SheetError(Exception):
    """Base class for all time tracking errors."""

    pass


class PunchError(SheetError):
    """A punch was attempted from a state that does not allow it."""

    pass


class AlreadyPunchedIn(PunchError):
    """Raised when punching in while the last event is still open."""

    def __init__(self, since: datetime) -> None:
        self.since = since
        super().__init__(f"already punched in at {since.isoformat()}")


class AlreadyPunchedOut(PunchError):
    """Raised when punching out while the last event is already closed."""

    def __init__(self, since: datetime) -> None:
        self.since = since
        super().__init__(f"not punched in, last punched out at {since.isoformat()}")


class NoPunchesRecorded(PunchError):
    """Raised when punching out of a sheet with no events."""

    def __init__(self) -> None:
        super().__init__("not punched in, no punch-ins recorded")


class StorageError(SheetError):
    """Failure at the persistence boundary.

    The underlying exception, if any, is available as ``__cause__``.
    """

    default_message = "sheet storage error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class LocationNotFound(StorageError):
    default_message = "unable to find sheet file"


class ReadFailure(StorageError):
    default_message = "unable to read sheet file"


class SheetNotFound(ReadFailure):
    default_message = "sheet file does not exist"


class ParseFailure(StorageError):
    default_message = "unable to parse sheet"


class WriteFailure(StorageError):
    default_message = "unable to write sheet to file"
