from __future__ import annotations

from datetime import datetime

import pytest

from flapboard.models import BoardState, DisplayFlight, StatusTier
from flapboard.utils.cache import invalidate_all

NOW = datetime(2024, 1, 2, 12, 0)


def flight(ts: str, flight_id: str = "KE001", estimated: str = "") -> DisplayFlight:
    return DisplayFlight(
        flight_id=flight_id,
        airport="TOKYO NARITA",
        time=f"{ts[8:10]}:{ts[10:12]}" if len(ts) >= 12 else "--:--",
        status="SCHEDULED",
        status_class=StatusTier.NEUTRAL,
        schedule_datetime=ts,
        estimated_datetime=estimated,
    )


def flights(count: int, prefix: str = "KE") -> list[DisplayFlight]:
    return [flight(f"20240102{12 + i // 60:02d}{i % 60:02d}", f"{prefix}{i:03d}") for i in range(count)]


@pytest.fixture
def state() -> BoardState:
    return BoardState(rows_per_page=8)


@pytest.fixture(autouse=True)
def _fresh_cache():
    invalidate_all()
    yield
    invalidate_all()
