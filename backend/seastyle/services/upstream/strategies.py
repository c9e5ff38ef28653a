"""
Strategy lists for day availability and the marina directory.

Order matters: the structured JSON endpoint first (two date formats), then the
HTML-rendering pages. Paths and parameter names live in the tables below.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, NamedTuple

from seastyle.services.upstream.base import CancelSignal, Fetched
from seastyle.services.upstream.chain import Strategy

if TYPE_CHECKING:
    from seastyle.services.upstream.client import SeaStyleClient

CLUB_BOAT_EMPTY_LIST_PATH = "/api/Reserve/GetClubBoatEmptyList"
MARINA_LIST_PATH = "/api/Reserve/GetMarinaList"

DATE_FORMAT_ISO = "iso"  # 2025-06-01
DATE_FORMAT_SLASH = "slash"  # 2025/06/01

# JSON body variants for GetClubBoatEmptyList, tried in order
JSON_DATE_FORMATS = (DATE_FORMAT_ISO, DATE_FORMAT_SLASH)


class HtmlCandidate(NamedTuple):
    path: str
    date_param: str
    date_format: str


# Server-rendered availability pages, requested with format=partial
HTML_AVAILABILITY_CANDIDATES = (
    HtmlCandidate("/Reserve/ClubBoatEmptyList", "targetDate", DATE_FORMAT_ISO),
    HtmlCandidate("/Reserve/ClubBoatEmptyList", "targetDate", DATE_FORMAT_SLASH),
    HtmlCandidate("/Reserve/ClubBoatReserve", "reserveDate", DATE_FORMAT_SLASH),
)


class MarinaEndpoint(NamedTuple):
    method: str
    path: str


# Alternatives when GetMarinaList (POST) does not answer with marinas
ALTERNATIVE_MARINA_ENDPOINTS = (
    MarinaEndpoint("GET", MARINA_LIST_PATH),
    MarinaEndpoint("GET", "/api/Marina/GetMarinaList"),
    MarinaEndpoint("POST", "/api/Marina/GetList"),
)


def format_date(day: date, date_format: str) -> str:
    if date_format == DATE_FORMAT_SLASH:
        return day.strftime("%Y/%m/%d")
    return day.isoformat()


@dataclass(frozen=True)
class DayContext:
    client: SeaStyleClient
    marina_cd: str
    day: date
    signal: CancelSignal | None = None


@dataclass(frozen=True)
class DirectoryContext:
    client: SeaStyleClient
    signal: CancelSignal | None = None


def _json_variant(date_format: str) -> Strategy[DayContext]:
    async def run(ctx: DayContext) -> Fetched:
        body = {"marinaCd": ctx.marina_cd, "targetDate": format_date(ctx.day, date_format)}
        return await ctx.client.request("POST", CLUB_BOAT_EMPTY_LIST_PATH, json=body, signal=ctx.signal)

    return Strategy(name=f"json:{date_format}", run=run)


def _html_variant(candidate: HtmlCandidate) -> Strategy[DayContext]:
    async def run(ctx: DayContext) -> Fetched:
        params = {
            "marinaCd": ctx.marina_cd,
            candidate.date_param: format_date(ctx.day, candidate.date_format),
            "format": "partial",
        }
        return await ctx.client.request("GET", candidate.path, params=params, signal=ctx.signal)

    return Strategy(name=f"html:{candidate.path}:{candidate.date_format}", run=run)


def _marina_endpoint(endpoint: MarinaEndpoint, name: str) -> Strategy[DirectoryContext]:
    async def run(ctx: DirectoryContext) -> Fetched:
        body = {} if endpoint.method == "POST" else None
        return await ctx.client.request(endpoint.method, endpoint.path, json=body, signal=ctx.signal)

    return Strategy(name=name, run=run)


def day_strategies() -> list[Strategy[DayContext]]:
    return [_json_variant(f) for f in JSON_DATE_FORMATS] + [
        _html_variant(c) for c in HTML_AVAILABILITY_CANDIDATES
    ]


def directory_strategies() -> list[Strategy[DirectoryContext]]:
    out = [_marina_endpoint(MarinaEndpoint("POST", MARINA_LIST_PATH), "marina-list")]
    for endpoint in ALTERNATIVE_MARINA_ENDPOINTS:
        out.append(_marina_endpoint(endpoint, f"alt:{endpoint.method} {endpoint.path}"))
    return out
