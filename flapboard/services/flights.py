"""Incheon Airport flight status — data.go.kr statusOfAllFltDeOdp.

Two ways in:
  proxy (default)   GET {proxy_url}?type=arrival|departure&date=YYYYMMDD&_t=<ms>
  direct (with key) GET https://apis.data.go.kr/B551177/statusOfAllFltDeOdp
                        /getFltArrivalsDeOdp | /getFltDeparturesDeOdp
                        ?serviceKey=…&searchDate=YYYYMMDD&numOfRows=4000&pageNo=1

Both return the same XML:
  <response><body><items><item>
    <flightId/> <airport/> <scheduleDatetime/> <estimatedDatetime/> <remark/>
  </item>…</items></body></response>

A <returnAuthMsg> element anywhere in the document means the upstream refused
the request (bad or expired key) and is treated like a transport failure.
"""

from __future__ import annotations

import asyncio
import logging
import time
import xml.etree.ElementTree as ET

import aiohttp

from flapboard.models import Direction, FlightRecord
from flapboard.utils.http import fetch_text

logger = logging.getLogger(__name__)

UPSTREAM_URL = "https://apis.data.go.kr/B551177/statusOfAllFltDeOdp"
_OPERATIONS = {
    Direction.ARRIVAL: "/getFltArrivalsDeOdp",
    Direction.DEPARTURE: "/getFltDeparturesDeOdp",
}
_ROWS_PER_DAY = 4000    # a whole day in one page


class FlightApiError(Exception):
    """A (date, direction) request produced no usable flight list."""


class FlightApiClient:
    """Fetch one day of arrivals or departures as raw FlightRecords."""

    def __init__(self, proxy_url: str = "", api_key: str = "") -> None:
        self._proxy_url = proxy_url
        self._api_key = api_key

    @property
    def direct(self) -> bool:
        return bool(self._api_key)

    async def fetch_day(self, direction: Direction, date: str) -> list[FlightRecord]:
        """Single attempt, no retry; any failure raises FlightApiError."""
        url, params, shown = self._request(direction, date)
        try:
            text = await fetch_text(url, params=params, retries=1, log_url=shown)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise FlightApiError(f"{direction.value} {date}: {exc}") from exc
        return parse_payload(text, label=f"{direction.value} {date}")

    def _request(self, direction: Direction, date: str) -> tuple[str, dict[str, str], str]:
        if self.direct:
            url = UPSTREAM_URL + _OPERATIONS[direction]
            params = {
                "serviceKey": self._api_key,
                "searchDate": date,
                "numOfRows": str(_ROWS_PER_DAY),
                "pageNo": "1",
            }
            shown = f"{url}?serviceKey=***&searchDate={date}"
            return url, params, shown

        params = {
            "type": direction.value,
            "date": date,
            "_t": str(int(time.time() * 1000)),    # defeat intermediate caches
        }
        return self._proxy_url, params, f"{self._proxy_url}?type={direction.value}&date={date}"


def parse_payload(text: str, label: str = "payload") -> list[FlightRecord]:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FlightApiError(f"{label}: malformed XML ({exc})") from exc

    auth = root.find(".//returnAuthMsg")
    if root.tag == "returnAuthMsg" or auth is not None:
        msg = (auth.text if auth is not None else root.text) or "unknown"
        raise FlightApiError(f"{label}: upstream rejected request ({msg.strip()})")

    return [_parse_item(item) for item in root.iter("item")]


def _parse_item(item: ET.Element) -> FlightRecord:
    return FlightRecord(
        flight_id=_text(item, "flightId", "-"),
        airport_raw=_text(item, "airport", "-"),
        schedule_datetime=_text(item, "scheduleDatetime", ""),
        estimated_datetime=_text(item, "estimatedDatetime", ""),
        remark_raw=_text(item, "remark", "-"),
    )


def _text(item: ET.Element, tag: str, default: str) -> str:
    value = item.findtext(tag)
    return value if value else default
