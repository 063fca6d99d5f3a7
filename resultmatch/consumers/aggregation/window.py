"""Date window filtering.

Restricts results to concluded matches that kicked off within a trailing
window before now.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from resultmatch.core.types import RawResult
from resultmatch.utilities.tz import now_utc, to_utc


def window_start(window_days: int, now: datetime | None = None) -> datetime:
    """Earliest kickoff (UTC) still inside the window."""
    if window_days < 0:
        raise ValueError(f"window_days must be >= 0, got {window_days}")
    return to_utc(now or now_utc()) - timedelta(days=window_days)


def filter_window(
    results: Iterable[RawResult],
    window_days: int,
    now: datetime | None = None,
) -> list[RawResult]:
    """Keep concluded results with kickoff_time >= now - window_days.

    Args:
        results: Results to filter
        window_days: Trailing window in days
        now: Reference time (defaults to the current UTC time)

    Returns:
        Results inside the window, input order preserved
    """
    start = window_start(window_days, now)
    return [r for r in results if r.is_matchable and r.kickoff_utc >= start]
