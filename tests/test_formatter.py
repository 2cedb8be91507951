from __future__ import annotations

from conftest import NOW, flights

from flapboard.models import BoardState, Direction, DisplayFlight, FlightSet, StatusTier
from flapboard.services.formatter import flap_text, format_board, format_row, format_status


def test_flap_text_pads_and_uppercases():
    assert flap_text("ke704", 7) == "KE704  "
    assert flap_text("", 5) == "-    "
    assert flap_text("HO CHI MINH CITY AIRPORT", 19) == "HO CHI MINH CITY AI"


def test_row_carries_tier_marker():
    row = format_row(DisplayFlight("KE1", "GUAM", "09:30", "DELAYED", StatusTier.CAUTION))
    assert row.startswith("🟠 ")
    assert "DELAYED" in row


def test_blank_row_has_no_text():
    assert format_row(DisplayFlight.blank()).strip() == ""


def test_board_shows_both_sections_with_full_pages():
    state = BoardState(rows_per_page=4, flights=FlightSet(arrivals=flights(6)))
    state.cursor.arrivals = 1
    text = format_board(state, NOW)
    assert text.startswith("🛬 <b>INCHEON INTERNATIONAL AIRPORT</b>\n🕐 2024-01-02 12:00")
    assert "ARRIVALS" in text and "DEPARTURES" in text
    assert "page 2/2" in text
    assert "page 1/1" in text
    assert "KE004" in text and "KE005" in text
    assert "KE000" not in text
    # header + 4 rows in each <pre>
    for block in text.split("<pre>")[1:]:
        assert block.split("</pre>")[0].count("\n") == 4


def test_status_summary():
    state = BoardState(rows_per_page=8, flights=FlightSet(arrivals=flights(10)))
    text = format_status(state, NOW)
    assert "10 flights" in text
    assert "never" in text
    assert f"{state.rows_per_page} rows" in text
    assert len(state.flights.get(Direction.DEPARTURE)) == 0
