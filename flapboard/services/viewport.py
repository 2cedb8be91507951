"""Rows per page from the display size."""

from __future__ import annotations

import logging
import math

from flapboard.models import BoardState
from flapboard.services.pagination import reset_cursors

logger = logging.getLogger(__name__)

MOBILE_BREAKPOINT = 768
MOBILE_ROWS = 4
MIN_ROWS = 4

HEADER_HEIGHT = 250          # header + margins, px
MIN_ROW_HEIGHT = 60
ROW_HEIGHT_RATIO = 0.06      # of screen height

# (min screen height, max rows), tallest first
HEIGHT_TIERS: tuple[tuple[int, int], ...] = (
    (2160, 14),   # 4K
    (1440, 10),   # 2K
    (1080, 8),    # FHD
    (900, 6),     # HD+
)


def compute_rows_per_page(width: int, height: int) -> int:
    if width < MOBILE_BREAKPOINT:
        return MOBILE_ROWS

    row_height = max(MIN_ROW_HEIGHT, height * ROW_HEIGHT_RATIO)
    candidate = math.floor((height - HEADER_HEIGHT) / row_height)

    for min_height, max_rows in HEIGHT_TIERS:
        if height >= min_height:
            return max(min(candidate, max_rows), MIN_ROWS)
    return max(candidate, MIN_ROWS)


def apply_rows_per_page(state: BoardState, rows: int) -> bool:
    """Switch page size.  True when it changed and the board must be redrawn.

    A new page size moves every slice boundary, so the rendered board is
    dropped and both cursors go back to page 0; the flight data is kept.
    """
    if rows == state.rows_per_page:
        return False
    logger.info("Rows updated: %d -> %d", state.rows_per_page, rows)
    state.rows_per_page = rows
    state.board_message_id = None
    reset_cursors(state)
    return True


def resize(state: BoardState, width: int, height: int) -> bool:
    """Record a settled viewport size and apply its row count."""
    state.viewport = (width, height)
    return apply_rows_per_page(state, compute_rows_per_page(width, height))
