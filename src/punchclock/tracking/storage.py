"""JSON file persistence for sheets.

This module handles encoding sheets to and from their JSON document form
and loading and saving them at a resolved location, with file locking
around each read-modify-write.
"""

import json
import logging
from pathlib import Path

from filelock import FileLock, Timeout
from pydantic import ValidationError

from punchclock.config import settings
from punchclock.tracking.errors import (
    LocationNotFound,
    ParseFailure,
    ReadFailure,
    SheetNotFound,
    WriteFailure,
)
from punchclock.tracking.sheet import Sheet

logger = logging.getLogger(__name__)


def encode_sheet(sheet: Sheet) -> bytes:
    """Encode a sheet as an indented JSON document.

    Args:
        sheet: Sheet to encode.

    Returns:
        UTF-8 encoded JSON bytes.
    """
    json_data = sheet.model_dump(mode="json")
    return json.dumps(json_data, indent=2).encode("utf-8")


def decode_sheet(data: bytes) -> Sheet:
    """Decode a sheet from its JSON document form.

    An empty (or whitespace-only) document is a sheet with no events.

    Args:
        data: Raw document bytes.

    Returns:
        The decoded sheet, trusted as-is.

    Raises:
        ParseFailure: If the document is not valid JSON or not a sheet.
    """
    if not data.strip():
        return Sheet()

    try:
        return Sheet.model_validate_json(data)
    except ValidationError as e:
        raise ParseFailure() from e


class SheetStorage:
    """JSON file-based storage for a single sheet.

    Example:
        storage = SheetStorage("/path/to/sheet.json")
        sheet = storage.load()
        sheet.punch_in()
        storage.save(sheet)
    """

    def __init__(
        self,
        path: str | Path | None = None,
        create_if_missing: bool | None = None,
        lock_timeout: float | None = None,
    ) -> None:
        """Initialize the sheet storage.

        Args:
            path: Path to the JSON sheet file (default: from settings).
            create_if_missing: Create an empty sheet file if none exists.
            lock_timeout: Seconds to wait for the file lock (-1 waits forever).
        """
        self._path = Path(path) if path is not None else None
        self._create_if_missing = (
            settings.create_if_missing if create_if_missing is None else create_if_missing
        )
        self._lock_timeout = settings.lock_timeout if lock_timeout is None else lock_timeout

    def resolve_location(self) -> Path:
        """Resolve where the sheet file lives.

        Raises:
            LocationNotFound: If no path was given and the default location
                cannot be determined.
        """
        if self._path is not None:
            return self._path

        try:
            return settings.get_sheet_path()
        except RuntimeError as e:
            raise LocationNotFound() from e

    @property
    def path(self) -> Path:
        """Get the storage file path."""
        return self.resolve_location()

    def _lock(self, path: Path) -> FileLock:
        path.parent.mkdir(parents=True, exist_ok=True)
        return FileLock(str(path.with_name(path.name + ".lock")), timeout=self._lock_timeout)

    def read(self) -> bytes:
        """Read the raw sheet document.

        Returns:
            Document bytes (an empty sheet document if the file was just created).

        Raises:
            SheetNotFound: If the file doesn't exist and create_if_missing is False.
            ReadFailure: If the file cannot be read.
        """
        path = self.resolve_location()
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            if not self._create_if_missing:
                raise SheetNotFound(f"sheet file not found: {path}") from e
        except OSError as e:
            raise ReadFailure() from e

        data = encode_sheet(Sheet())
        self.write(data)
        logger.info(f"Created sheet file: {path}")
        return data

    def write(self, data: bytes) -> None:
        """Write a raw sheet document, creating parent directories.

        Raises:
            WriteFailure: If the file cannot be written.
        """
        path = self.resolve_location()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise WriteFailure() from e

    def load(self) -> Sheet:
        """Load the sheet from storage.

        Raises:
            LocationNotFound: If the location cannot be resolved.
            ReadFailure: If the file cannot be read or locked.
            ParseFailure: If the file does not hold a valid sheet.
        """
        path = self.resolve_location()
        if not self._create_if_missing and not path.exists():
            raise SheetNotFound(f"sheet file not found: {path}")

        try:
            with self._lock(path):
                sheet = decode_sheet(self.read())
        except Timeout as e:
            raise ReadFailure(f"timed out waiting for lock on {path}") from e
        except OSError as e:
            raise ReadFailure() from e

        logger.debug(f"Loaded {len(sheet.events)} events from {path}")
        return sheet

    def save(self, sheet: Sheet) -> None:
        """Save the sheet to storage.

        Raises:
            LocationNotFound: If the location cannot be resolved.
            WriteFailure: If the file cannot be written or locked.
        """
        path = self.resolve_location()
        try:
            with self._lock(path):
                self.write(encode_sheet(sheet))
        except Timeout as e:
            raise WriteFailure(f"timed out waiting for lock on {path}") from e
        except OSError as e:
            raise WriteFailure() from e

        logger.debug(f"Saved {len(sheet.events)} events to {path}")
