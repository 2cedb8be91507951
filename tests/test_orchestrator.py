from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

from conftest import NOW

from flapboard.models import BoardState, Direction, FlightRecord, FlightSet
from flapboard.services import flights as flights_mod
from flapboard.services.flights import FlightApiClient, FlightApiError
from flapboard.services.orchestrator import FlightBoardPipeline, window_dates
from flapboard.services.translator import AirportTable

YESTERDAY, TODAY, TOMORROW = "20240101", "20240102", "20240103"


def rec(flight_id: str, ts: str, remark: str = "예정") -> FlightRecord:
    return FlightRecord(flight_id=flight_id, airport_raw="괌", schedule_datetime=ts, remark_raw=remark)


class FakeClient:
    """Canned responses per (direction, date) or per direction for any date.

    An Exception value is raised instead of returned.
    """

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    async def fetch_day(self, direction, date):
        self.calls.append((direction, date))
        result = self.responses.get((direction, date), self.responses.get(direction, []))
        if isinstance(result, Exception):
            raise result
        return result


def pipeline(client) -> FlightBoardPipeline:
    return FlightBoardPipeline(client, AirportTable({"괌": "GUAM"}))


def test_window_dates():
    assert window_dates(NOW) == [YESTERDAY, TODAY, TOMORROW]


def test_fetch_all_issues_six_requests():
    client = FakeClient({})
    asyncio.run(pipeline(client).fetch_all(NOW))
    assert sorted(client.calls) == sorted(
        (d, date) for d in Direction for date in (YESTERDAY, TODAY, TOMORROW)
    )


def test_failed_slice_degrades_to_empty():
    client = FakeClient({
        (Direction.DEPARTURE, YESTERDAY): [rec("DEP-Y", "202401021300")],
        (Direction.DEPARTURE, TODAY): FlightApiError("Status 500"),
        (Direction.DEPARTURE, TOMORROW): [rec("DEP-T", "202401021500"), rec("DEP-LATE", "202401031500")],
        (Direction.ARRIVAL, TODAY): [rec("ARR-1", "202401021100", "도착")],
    })
    result = asyncio.run(pipeline(client).fetch_all(NOW))

    assert [f.flight_id for f in result.departures] == ["DEP-Y", "DEP-T"]
    assert [f.flight_id for f in result.arrivals] == ["ARR-1"]
    assert result.arrivals[0].airport == "GUAM"
    assert result.arrivals[0].status == "ARRIVED"


def test_merged_results_sorted_across_dates():
    client = FakeClient({
        (Direction.ARRIVAL, TOMORROW): [rec("B", "202401021400")],
        (Direction.ARRIVAL, TODAY): [rec("A", "202401021000")],
    })
    result = asyncio.run(pipeline(client).fetch_all(NOW))
    assert [f.flight_id for f in result.arrivals] == ["A", "B"]


def test_cross_date_duplicates_kept():
    client = FakeClient({
        (Direction.ARRIVAL, YESTERDAY): [rec("KE1", "202401021200")],
        (Direction.ARRIVAL, TODAY): [rec("KE1", "202401021200")],
    })
    result = asyncio.run(pipeline(client).fetch_all(NOW))
    assert [f.flight_id for f in result.arrivals] == ["KE1", "KE1"]


def test_fallback_when_window_is_empty():
    far = [rec(f"F{i:02d}", f"202401051{i // 10}{i % 10}0") for i in range(25)]
    client = FakeClient({(Direction.DEPARTURE, TODAY): far})
    result = asyncio.run(pipeline(client).fetch_all(NOW))
    assert len(result.departures) == 20
    assert result.arrivals == []


def test_refresh_replaces_data_and_resets_cursors():
    client = FakeClient({Direction.ARRIVAL: [rec("A", "202401021200")]})
    state = BoardState(rows_per_page=4)
    state.cursor.arrivals = 3
    state.cursor.departures = 2

    ok = asyncio.run(pipeline(client).refresh(state))

    assert ok is True
    # Far outside today's live window: the fallback shows every day's copy
    assert [f.flight_id for f in state.flights.arrivals] == ["A", "A", "A"]
    assert state.cursor.arrivals == 0
    assert state.cursor.departures == 0
    assert state.last_refresh is not None
    assert state.refreshing is False


def test_unexpected_slice_error_degrades_to_empty():
    client = FakeClient({
        (Direction.DEPARTURE, TODAY): RuntimeError("boom"),
        (Direction.DEPARTURE, TOMORROW): [rec("DEP-T", "202401021500")],
        (Direction.ARRIVAL, TODAY): [rec("ARR-1", "202401021100")],
    })
    result = asyncio.run(pipeline(client).fetch_all(NOW))
    assert [f.flight_id for f in result.departures] == ["DEP-T"]
    assert [f.flight_id for f in result.arrivals] == ["ARR-1"]


def test_undecodable_body_keeps_sibling_requests(monkeypatch):
    item = (
        "<response><body><items><item><flightId>{fid}</flightId><airport>괌</airport>"
        "<scheduleDatetime>202401021200</scheduleDatetime><remark>예정</remark>"
        "</item></items></body></response>"
    )

    async def fake_fetch_text(url, *, params=None, **kwargs):
        if params["type"] == "departure" and params["date"] == TODAY:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        return item.format(fid=f"{params['type']}-{params['date']}")

    monkeypatch.setattr(flights_mod, "fetch_text", fake_fetch_text)
    client = FlightApiClient(proxy_url="http://proxy.test/api/flights")

    result = asyncio.run(pipeline(client).fetch_all(NOW))

    assert len(result.arrivals) == 3
    assert [f.flight_id for f in result.departures] == [
        f"departure-{YESTERDAY}", f"departure-{TOMORROW}",
    ]


def test_refresh_failure_keeps_previous_data():
    p = pipeline(FakeClient({}))
    p.fetch_all = AsyncMock(side_effect=RuntimeError("boom"))
    state = BoardState(rows_per_page=4)
    previous = FlightSet(arrivals=[], departures=[])
    state.flights = previous
    state.cursor.arrivals = 2

    ok = asyncio.run(p.refresh(state))

    assert ok is False
    assert state.flights is previous
    assert state.cursor.arrivals == 2
    assert state.refreshing is False


def test_refresh_skipped_while_in_flight():
    client = FakeClient({})
    state = BoardState(rows_per_page=4, refreshing=True)
    ok = asyncio.run(pipeline(client).refresh(state))
    assert ok is False
    assert client.calls == []
