"""Board pipeline — orchestrates fetch → translate → window filter.

asyncio.gather() runs the six (date, direction) requests concurrently.
Each request catches its own failure, so one dead slice never kills the rest.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta

from flapboard.models import BoardState, Direction, DisplayFlight, FlightRecord, FlightSet
from flapboard.services.flights import FlightApiClient, FlightApiError
from flapboard.services.pagination import reset_cursors
from flapboard.services.time_window import FALLBACK_CAP, local_now, select_for_display
from flapboard.services.translator import AirportTable, translate_record

logger = logging.getLogger(__name__)

DAY_OFFSETS = (-1, 0, 1)


def window_dates(now: datetime) -> list[str]:
    """Yesterday, today, tomorrow as YYYYMMDD."""
    return [(now + timedelta(days=d)).strftime("%Y%m%d") for d in DAY_OFFSETS]


class FlightBoardPipeline:

    def __init__(
        self,
        client: FlightApiClient,
        airports: AirportTable,
        timezone: str = "Asia/Seoul",
        fallback_cap: int = FALLBACK_CAP,
    ) -> None:
        self._client = client
        self._airports = airports
        self._timezone = timezone
        self._fallback_cap = fallback_cap

    async def fetch_all(self, now: datetime | None = None) -> FlightSet:
        now = now or local_now(self._timezone)
        dates = window_dates(now)
        logger.info("Fetching flight data for dates: %s", ", ".join(dates))

        slices = [(date, direction) for date in dates for direction in Direction]
        results = await asyncio.gather(
            *(self._fetch_slice(direction, date) for date, direction in slices)
        )

        merged: dict[Direction, list[DisplayFlight]] = {d: [] for d in Direction}
        for (_, direction), records in zip(slices, results):
            # No cross-date dedup: the same flightId on two days is two rows
            merged[direction].extend(translate_record(r, self._airports) for r in records)

        flight_set = FlightSet(
            arrivals=select_for_display(
                merged[Direction.ARRIVAL], Direction.ARRIVAL, now, self._fallback_cap,
            ),
            departures=select_for_display(
                merged[Direction.DEPARTURE], Direction.DEPARTURE, now, self._fallback_cap,
            ),
        )
        logger.info(
            "Updated data: dep=%d, arr=%d",
            len(flight_set.departures), len(flight_set.arrivals),
        )
        return flight_set

    async def refresh(self, state: BoardState) -> bool:
        """Rebuild the FlightSet in *state*.  False when skipped or failed.

        A cycle still in flight makes this a no-op; a failed cycle keeps the
        previous FlightSet on the board.
        """
        if state.refreshing:
            logger.warning("Refresh skipped: previous cycle still in flight")
            return False

        state.refreshing = True
        try:
            flight_set = await self.fetch_all()
        except Exception:
            logger.exception("Refresh failed, keeping previous flight data")
            return False
        finally:
            state.refreshing = False

        state.flights = flight_set
        state.last_refresh = local_now(self._timezone)
        reset_cursors(state)
        return True

    async def _fetch_slice(self, direction: Direction, date: str) -> list[FlightRecord]:
        try:
            return await self._client.fetch_day(direction, date)
        except FlightApiError as exc:
            logger.warning("Failed to fetch %s on %s: %s", direction.value, date, exc)
            return []
        except Exception:
            logger.exception("Unexpected failure fetching %s on %s", direction.value, date)
            return []
