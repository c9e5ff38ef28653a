"""Normalized types for day availability and the marina directory. Same shape regardless of upstream format."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from seastyle.core.constants import STATUS_KEYS


@dataclass(frozen=True)
class Slot:
    """One reservable time window with a classified status."""

    time_text: str | None
    status_key: str
    status_label: str
    status_raw: Any = None
    note: str | None = None
    sort_key: int | None = None  # minutes since midnight; None sorts last
    boat_name: str | None = None
    raw: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeText": self.time_text,
            "statusKey": self.status_key,
            "statusLabel": self.status_label,
            "statusRaw": self.status_raw,
            "note": self.note,
            "sortKey": self.sort_key,
            "boatName": self.boat_name,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class Group:
    title: str
    slots: tuple[Slot, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "slots": [s.to_dict() for s in self.slots]}


@dataclass(frozen=True)
class Summary:
    total: int
    statuses: dict[str, int]

    @classmethod
    def empty(cls) -> Summary:
        return cls(total=0, statuses={key: 0 for key in STATUS_KEYS})

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "statuses": dict(self.statuses)}


@dataclass(frozen=True)
class DebugInfo:
    """Diagnostics attached by the fetch layer: which strategy answered and what it returned."""

    strategy: str
    url: str
    raw_payload: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    errors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "url": self.url,
            "rawPayload": self.raw_payload,
            "headers": dict(self.headers),
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class NormalizedResult:
    groups: tuple[Group, ...]
    summary: Summary
    raw: Any = None
    debug: DebugInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "groups": [g.to_dict() for g in self.groups],
            "summary": self.summary.to_dict(),
            "raw": self.raw,
        }
        if self.debug is not None:
            out["debug"] = self.debug.to_dict()
        return out


@dataclass(frozen=True)
class MarinaEntry:
    code: str
    name: str
    name_kana: str | None = None
    prefecture: str | None = None
    area: str | None = None
    raw: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "nameKana": self.name_kana,
            "prefecture": self.prefecture,
            "area": self.area,
        }


@dataclass(frozen=True)
class MarinaDirectory:
    marinas: tuple[MarinaEntry, ...]
    meta: DebugInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"marinas": [m.to_dict() for m in self.marinas]}
        if self.meta is not None:
            out["meta"] = self.meta.to_dict()
        return out
