"""Raw Korean field values → board display values.

Airport names come from a flat JSON table (Korean name → English code/name)
shipped in flapboard/data/airports.json.  Status remarks use a fixed table;
the colour tier is derived from the raw remark, never from the translation.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from flapboard.models import DisplayFlight, FlightRecord, StatusTier
from flapboard.utils.cache import first_sighting

logger = logging.getLogger(__name__)

NO_TIME = "--:--"

_QUALIFIER = re.compile(r"\(.*\)")
_HANGUL = re.compile(r"[ㄱ-ㅎㅏ-ㅣ가-힣]")

# Scanned in order, first substring hit wins
STATUS_LABELS: tuple[tuple[str, str], ...] = (
    ("도착", "ARRIVED"),
    ("출발", "DEPARTED"),
    ("지연", "DELAYED"),
    ("결항", "CANCELLED"),
    ("취소", "CANCELLED"),
    ("탑승중", "BOARDING"),
    ("탑승준비", "GATE OPEN"),
    ("마감", "CLOSED"),
    ("예정", "SCHEDULED"),
    ("탑승구변경", "GATE CHNG"),
    ("수하물", "BAGGAGE"),
    ("체크인", "CHECK-IN"),
    ("이륙", "TAKE OFF"),
)

_CRITICAL = ("결항", "취소", "회항")
_CAUTION = ("지연", "탑승구변경", "탑승중", "마감")
_NORMAL = ("도착", "출발", "이륙")


class AirportTable:
    """Korean airport name → display name, with an upper-case fallback."""

    def __init__(self, mapping: dict[str, str] | None = None) -> None:
        self._mapping = dict(mapping or {})

    def __len__(self) -> int:
        return len(self._mapping)

    def translate(self, raw: str) -> str:
        if raw in self._mapping:
            return self._mapping[raw]

        # "다낭(다낭)" -> "다낭"
        clean = _QUALIFIER.sub("", raw).strip()
        if clean in self._mapping:
            return self._mapping[clean]

        result = raw.upper()
        if _HANGUL.search(result) and first_sighting(f"airport:{raw}"):
            logger.warning("Missing airport in table: %s", raw)
        return result


def load_airport_table(path: str | Path) -> AirportTable:
    """Read the translation table; any failure leaves an empty table."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.error("Failed to load airport data from %s: %s", path, exc)
        return AirportTable()

    if not isinstance(data, dict):
        logger.error("Airport data in %s is not a flat object", path)
        return AirportTable()

    table = AirportTable({str(k): str(v) for k, v in data.items()})
    logger.info("Airport data loaded: %d airports", len(table))
    return table


def format_time(value: str | None) -> str:
    if not value or len(value) < 12:
        return NO_TIME
    return f"{value[8:10]}:{value[10:12]}"


def translate_status(raw: str) -> str:
    for needle, label in STATUS_LABELS:
        if needle in raw:
            return label
    return raw.upper()


def classify_status(raw: str) -> StatusTier:
    if any(s in raw for s in _CRITICAL):
        return StatusTier.CRITICAL
    if any(s in raw for s in _CAUTION):
        return StatusTier.CAUTION
    if any(s in raw for s in _NORMAL):
        return StatusTier.NORMAL
    return StatusTier.NEUTRAL


def translate_record(record: FlightRecord, airports: AirportTable) -> DisplayFlight:
    return DisplayFlight(
        flight_id=record.flight_id,
        airport=airports.translate(record.airport_raw),
        time=format_time(record.schedule_datetime or record.estimated_datetime),
        status=translate_status(record.remark_raw),
        status_class=classify_status(record.remark_raw),
        schedule_datetime=record.schedule_datetime,
        estimated_datetime=record.estimated_datetime,
    )
