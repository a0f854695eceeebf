"""punchclock - A lightweight terminal time-tracking utility."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("punchclock")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from punchclock.tracking import Event, Period, Sheet, SheetStatus, TimeTracker

__all__ = ["Event", "Sheet", "SheetStatus", "Period", "TimeTracker"]
