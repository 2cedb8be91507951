"""Domain models — pure dataclasses, no framework dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Direction(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"

    @property
    def collection(self) -> str:
        """Name of this direction's list on FlightSet / PageCursor."""
        return "arrivals" if self is Direction.ARRIVAL else "departures"


class StatusTier(str, Enum):
    CRITICAL = "critical"
    CAUTION = "caution"
    NORMAL = "normal"
    NEUTRAL = "neutral"


@dataclass
class FlightRecord:
    """One <item> of the flight-status payload, untouched."""
    flight_id: str = "-"
    airport_raw: str = "-"
    schedule_datetime: str = ""    # YYYYMMDDHHmm, may be empty
    estimated_datetime: str = ""
    remark_raw: str = "-"


@dataclass(frozen=True)
class DisplayFlight:
    flight_id: str
    airport: str
    time: str                      # "HH:MM" or "--:--"
    status: str
    status_class: StatusTier = StatusTier.NEUTRAL
    schedule_datetime: str = ""
    estimated_datetime: str = ""

    @property
    def timestamp(self) -> str:
        return self.schedule_datetime or self.estimated_datetime

    @property
    def is_blank(self) -> bool:
        return not (self.flight_id or self.airport or self.time or self.status)

    @classmethod
    def blank(cls) -> DisplayFlight:
        return cls(flight_id="", airport="", time="", status="")


@dataclass
class FlightSet:
    arrivals: list[DisplayFlight] = field(default_factory=list)
    departures: list[DisplayFlight] = field(default_factory=list)

    def get(self, direction: Direction) -> list[DisplayFlight]:
        return getattr(self, direction.collection)


@dataclass
class PageCursor:
    arrivals: int = 0
    departures: int = 0

    def get(self, direction: Direction) -> int:
        return getattr(self, direction.collection)

    def set(self, direction: Direction, value: int) -> None:
        setattr(self, direction.collection, value)


@dataclass
class BoardState:
    """Everything the refresh, rotation and resize jobs share.

    Owned by the application (bot_data["state"]); only the pipeline replaces
    ``flights``, only pagination and the resize handler move ``cursor``.
    """
    rows_per_page: int
    viewport: tuple[int, int] = (1920, 1080)
    flights: FlightSet = field(default_factory=FlightSet)
    cursor: PageCursor = field(default_factory=PageCursor)
    refreshing: bool = False
    last_refresh: datetime | None = None
    board_message_id: int | None = None    # rendered board in the chat
