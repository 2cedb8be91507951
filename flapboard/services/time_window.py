"""Rolling time window per direction.

Timestamps are ``YYYYMMDDHHmm`` in the airport's local time.  They are read as
naive calendar fields and compared against a naive local "now", so no
timezone conversion ever happens on the flight side.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import pytz

from flapboard.models import Direction, DisplayFlight

logger = logging.getLogger(__name__)

# (before now, after now); departures lean forward for check-in lead time
WINDOWS: dict[Direction, tuple[timedelta, timedelta]] = {
    Direction.ARRIVAL: (timedelta(hours=4), timedelta(hours=4)),
    Direction.DEPARTURE: (timedelta(hours=1), timedelta(hours=6)),
}

FALLBACK_CAP = 20


def local_now(timezone: str) -> datetime:
    """Board wall clock: current time in *timezone*, tzinfo dropped."""
    return datetime.now(tz=pytz.timezone(timezone)).replace(tzinfo=None)


def window_bounds(direction: Direction, now: datetime) -> tuple[datetime, datetime]:
    before, after = WINDOWS[direction]
    return now - before, now + after


def parse_timestamp(value: str) -> datetime | None:
    if not value or len(value) < 12:
        return None
    try:
        return datetime(
            int(value[0:4]), int(value[4:6]), int(value[6:8]),
            int(value[8:10]), int(value[10:12]),
        )
    except ValueError:
        return None


def filter_by_window(
    flights: list[DisplayFlight],
    direction: Direction,
    now: datetime,
) -> list[DisplayFlight]:
    """Flights inside the direction's window, oldest first.

    *now* is the board wall clock, see local_now().
    """
    min_time, max_time = window_bounds(direction, now)

    kept: list[DisplayFlight] = []
    for flight in flights:
        t = parse_timestamp(flight.timestamp)
        if t is None:
            continue
        if min_time <= t <= max_time:
            kept.append(flight)

    # Fixed-width zero-padded timestamps: lexical order is chronological
    kept.sort(key=lambda f: f.timestamp)

    logger.info("[%s] Filtered: %d / Total: %d", direction.value, len(kept), len(flights))
    return kept


def select_for_display(
    flights: list[DisplayFlight],
    direction: Direction,
    now: datetime,
    cap: int = FALLBACK_CAP,
) -> list[DisplayFlight]:
    """Window-filtered flights, or the first *cap* timed ones if the window is empty."""
    filtered = filter_by_window(flights, direction, now)
    if filtered or not flights:
        return filtered
    timed = [f for f in flights if parse_timestamp(f.timestamp) is not None]
    logger.warning(
        "[%s] nothing inside the window, showing first %d of %d",
        direction.value, min(cap, len(timed)), len(flights),
    )
    return timed[:cap]
