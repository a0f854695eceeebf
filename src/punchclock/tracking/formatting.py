"""Human-readable rendering of durations and instants."""

from datetime import datetime, timedelta

from punchclock.clock import to_utc


def format_duration(duration: timedelta) -> str:
    """Format a duration into a human-readable string.

    Args:
        duration: Duration to format

    Returns:
        Formatted string like "1h 23m" or "45m 12s"
    """
    seconds = int(duration.total_seconds())
    if seconds < 0:
        return "0s"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 and hours == 0:  # Only show seconds if under an hour
        parts.append(f"{secs}s")

    return " ".join(parts) if parts else "0s"


def format_instant(moment: datetime) -> str:
    """Format an instant as an RFC 3339 UTC timestamp, e.g. ``2020-03-01T09:30:00Z``."""
    return to_utc(moment).strftime("%Y-%m-%dT%H:%M:%SZ")
