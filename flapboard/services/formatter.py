"""Board rendering — Telegram HTML with monospaced flap text."""

from __future__ import annotations

import html
from datetime import datetime

from flapboard.models import BoardState, Direction, DisplayFlight, StatusTier
from flapboard.services.pagination import current_page, page_count, page_rows

# Column widths in flap characters
FLIGHT_WIDTH = 7
AIRPORT_WIDTH = 19
TIME_WIDTH = 5
STATUS_WIDTH = 9

TIER_MARKERS = {
    StatusTier.CRITICAL: "🔴",
    StatusTier.CAUTION: "🟠",
    StatusTier.NORMAL: "🟢",
    StatusTier.NEUTRAL: "⚪",
}

_TITLES = {
    Direction.ARRIVAL: ("✈️ ARRIVALS", "FROM"),
    Direction.DEPARTURE: ("🛫 DEPARTURES", "TO"),
}


def flap_text(text: str, width: int) -> str:
    """Upper-cased, space-padded to exactly *width* characters."""
    if not text:
        text = "-"
    return str(text).upper().ljust(width)[:width]


def format_row(flight: DisplayFlight) -> str:
    if flight.is_blank:
        return "  " + " ".join(
            " " * w for w in (FLIGHT_WIDTH, AIRPORT_WIDTH, TIME_WIDTH, STATUS_WIDTH)
        )
    cells = [
        flap_text(flight.flight_id, FLIGHT_WIDTH),
        flap_text(flight.airport, AIRPORT_WIDTH),
        flap_text(flight.time, TIME_WIDTH),
        flap_text(flight.status, STATUS_WIDTH),
    ]
    return f"{TIER_MARKERS[flight.status_class]} " + " ".join(cells)


def format_section(state: BoardState, direction: Direction) -> str:
    title, place = _TITLES[direction]
    page = current_page(state, direction) + 1
    pages = page_count(state, direction)
    header = "  " + " ".join([
        "FLIGHT".ljust(FLIGHT_WIDTH),
        place.ljust(AIRPORT_WIDTH),
        "TIME".ljust(TIME_WIDTH),
        "STATUS".ljust(STATUS_WIDTH),
    ])
    rows = [format_row(f) for f in page_rows(state, direction)]
    body = html.escape("\n".join([header, *rows]))
    return f"<b>{title}</b>  <i>page {page}/{pages}</i>\n<pre>{body}</pre>"


def format_board(state: BoardState, now: datetime) -> str:
    lines = [
        "🛬 <b>INCHEON INTERNATIONAL AIRPORT</b>",
        f"🕐 {now.strftime('%Y-%m-%d %H:%M')}",
        "",
        format_section(state, Direction.ARRIVAL),
        "",
        format_section(state, Direction.DEPARTURE),
    ]
    return "\n".join(lines)


def format_status(state: BoardState, now: datetime) -> str:
    last = state.last_refresh.strftime("%H:%M:%S") if state.last_refresh else "never"
    width, height = state.viewport
    lines = [
        "✅ <b>Flapboard is running</b>",
        f"🕐 {now.strftime('%Y-%m-%d %H:%M:%S')}",
        f"🔄 Last refresh: {last}",
        f"🖥 Viewport: {width}x{height}, {state.rows_per_page} rows per page",
    ]
    for direction in Direction:
        title, _ = _TITLES[direction]
        lines.append(
            f"{title}: {len(state.flights.get(direction))} flights, "
            f"page {current_page(state, direction) + 1}/{page_count(state, direction)}"
        )
    return "\n".join(lines)
