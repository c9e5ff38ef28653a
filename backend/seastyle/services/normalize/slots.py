"""
Slot builder: one raw upstream record (object or plain string) -> Slot.

Field names vary between Sea-Style deployments, so every lookup goes through an
ordered candidate table below. Add new spellings to the tables, not to the code.
"""
import logging
import re
from typing import Any, Iterable, Mapping

from seastyle.core.constants import (
    FALLBACK_GROUP_TITLE,
    NOTE_SEPARATOR,
    STATUS_UNKNOWN,
    TIME_RANGE_SEPARATOR,
)
from seastyle.services.normalize.status import (
    DEFAULT_NUMERIC_POLICY,
    NumericStatusPolicy,
    StatusResult,
    classify,
    is_known,
)
from seastyle.services.normalize.time_text import (
    build_sort_key,
    find_time_range,
    normalize_time,
)
from seastyle.services.normalize.types import Group, Slot

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Candidate field tables (priority order)
# ---------------------------------------------------------------------------

# Fields holding a whole range ("9:00〜12:00") or a single time
TIME_RANGE_FIELDS = (
    "timeRange",
    "timeText",
    "time",
    "timeZone",
    "timeZoneName",
    "timeSlot",
    "rentalTime",
    "displayTime",
    "period",
)
TIME_START_FIELDS = ("startTime", "startTm", "start", "fromTime", "timeFrom", "beginTime")
TIME_END_FIELDS = ("endTime", "endTm", "end", "toTime", "timeTo", "finishTime")
# Generic labels; only used when they actually contain a clock value
TIME_LABEL_FIELDS = ("label", "displayText", "text", "name")

STATUS_FIELDS = (
    "status",
    "statusName",
    "statusText",
    "statusLabel",
    "state",
    "vacancy",
    "vacancyStatus",
    "emptyStatus",
    "emptyFlg",
    "reserveStatus",
    "reservationStatus",
    "availability",
    "available",
    "isAvailable",
    "reservable",
    "canReserve",
    "mark",
    "symbol",
)

PLAN_NAME_FIELD = "planName"
NOTE_FIELDS = ("memo", "note", "remarks", "comment", "remainCount", "remain")
NOTES_ARRAY_FIELD = "notes"

BOAT_NAME_FIELDS = ("boatName", "boatNm", "boat")


def humanize_key(key: object) -> str:
    """remainCount / remain_count -> "Remain count". Non-ASCII keys come back unchanged."""
    s = str(key)
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", s).replace("_", " ").replace("-", " ").split()
    if not words:
        return s
    text = " ".join(w.lower() for w in words)
    return text[:1].upper() + text[1:]


def _scalar_text(value: Any) -> str | None:
    """Trimmed text for str/number values; None for empty, bool, containers."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        s = str(value).strip()
        return s or None
    return None


def _first_text(record: Mapping[str, Any], fields: Iterable[str]) -> str | None:
    for name in fields:
        s = _scalar_text(record.get(name))
        if s:
            return s
    return None


def _time_from_record(record: Mapping[str, Any]) -> str | None:
    ranged = _first_text(record, TIME_RANGE_FIELDS)
    if ranged:
        return normalize_time(ranged)
    start = normalize_time(_first_text(record, TIME_START_FIELDS))
    end = normalize_time(_first_text(record, TIME_END_FIELDS))
    if start and end:
        return f"{start}{TIME_RANGE_SEPARATOR}{end}"
    if start or end:
        return start or end
    for name in TIME_LABEL_FIELDS:
        label = _scalar_text(record.get(name))
        found = find_time_range(label) if label else None
        if found:
            return found
    return None


def _status_from_record(
    record: Mapping[str, Any],
    time_text: str | None,
    numeric_policy: NumericStatusPolicy = DEFAULT_NUMERIC_POLICY,
) -> StatusResult:
    first_unknown: StatusResult | None = None
    for name in STATUS_FIELDS:
        if name not in record or record[name] is None:
            continue
        result = classify(record[name], numeric_policy=numeric_policy)
        if is_known(result):
            return result
        if first_unknown is None:
            first_unknown = result
    if time_text:
        from_time = classify(time_text)
        if is_known(from_time):
            return from_time
    return first_unknown or classify(None)


def _note_from_record(record: Mapping[str, Any]) -> str | None:
    parts: list[str] = []
    plan = _scalar_text(record.get(PLAN_NAME_FIELD))
    if plan:
        parts.append(plan)
    for name in NOTE_FIELDS:
        s = _scalar_text(record.get(name))
        if s:
            parts.append(f"{humanize_key(name)}: {s}")
    notes = record.get(NOTES_ARRAY_FIELD)
    if isinstance(notes, list):
        for item in notes:
            s = _scalar_text(item)
            if s:
                parts.append(s)
    return NOTE_SEPARATOR.join(parts) if parts else None


def make_slot(
    *,
    time_text: str | None,
    status: StatusResult,
    note: str | None,
    boat_name: str | None,
    raw: Any,
) -> Slot | None:
    """Assemble a Slot, or None when the record carries no signal at all."""
    if not time_text and not note and status.key == STATUS_UNKNOWN:
        return None
    return Slot(
        time_text=time_text or None,
        status_key=status.key,
        status_label=status.label,
        status_raw=status.original,
        note=note or None,
        sort_key=build_sort_key(time_text),
        boat_name=boat_name,
        raw=raw,
    )


def build_slot(
    raw: Any,
    fallback_title: str | None = None,
    *,
    numeric_policy: NumericStatusPolicy = DEFAULT_NUMERIC_POLICY,
) -> Slot | None:
    """One raw record -> Slot. Returns None for records that carry no signal or are not str/mapping."""
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        return make_slot(
            time_text=find_time_range(text),
            status=classify(text),
            note=text,
            boat_name=fallback_title,
            raw=raw,
        )
    if not isinstance(raw, Mapping):
        return None
    time_text = _time_from_record(raw)
    slot = make_slot(
        time_text=time_text,
        status=_status_from_record(raw, time_text, numeric_policy),
        note=_note_from_record(raw),
        boat_name=_first_text(raw, BOAT_NAME_FIELDS) or fallback_title,
        raw=raw,
    )
    if slot is None:
        logger.debug("Skip record without time, note or status: keys=%s", list(raw.keys())[:10])
    return slot


def slot_sort_key(slot: Slot) -> tuple[bool, int, str]:
    """Ascending sort_key, missing keys last, ties by time text."""
    return (slot.sort_key is None, slot.sort_key or 0, slot.time_text or "")


def sort_slots(slots: Iterable[Slot]) -> tuple[Slot, ...]:
    return tuple(sorted(slots, key=slot_sort_key))


def merge_groups(found: Iterable[tuple[str | None, list[Slot]]]) -> list[Group]:
    """Merge (title, slots) pairs by resolved title in first-seen order; sort each group's slots."""
    by_title: dict[str, list[Slot]] = {}
    for title, slots in found:
        key = title or FALLBACK_GROUP_TITLE
        by_title.setdefault(key, []).extend(slots)
    return [Group(title=title, slots=sort_slots(slots)) for title, slots in by_title.items() if slots]
