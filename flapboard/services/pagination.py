"""Independent page rotation for arrivals and departures."""

from __future__ import annotations

import math

from flapboard.models import BoardState, Direction, DisplayFlight


def page_count(state: BoardState, direction: Direction) -> int:
    """Never below 1: an empty direction still shows one blank page."""
    total = len(state.flights.get(direction))
    return max(1, math.ceil(total / state.rows_per_page))


def current_page(state: BoardState, direction: Direction) -> int:
    # Recomputed every time so a cursor left over from a longer list stays in range
    return state.cursor.get(direction) % page_count(state, direction)


def visible_slice(state: BoardState, direction: Direction) -> list[DisplayFlight]:
    start = current_page(state, direction) * state.rows_per_page
    return state.flights.get(direction)[start:start + state.rows_per_page]


def pad_to_row_count(rows: list[DisplayFlight], rows_per_page: int) -> list[DisplayFlight]:
    padded = list(rows)
    while len(padded) < rows_per_page:
        padded.append(DisplayFlight.blank())
    return padded


def page_rows(state: BoardState, direction: Direction) -> list[DisplayFlight]:
    """Exactly ``rows_per_page`` entries for *direction*, blanks at the end."""
    return pad_to_row_count(visible_slice(state, direction), state.rows_per_page)


def rotate(state: BoardState) -> None:
    for direction in Direction:
        pages = page_count(state, direction)
        if pages > 1:
            state.cursor.set(direction, (state.cursor.get(direction) + 1) % pages)


def reset_cursors(state: BoardState) -> None:
    for direction in Direction:
        state.cursor.set(direction, 0)
