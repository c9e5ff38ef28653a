"""
Payload normalizer: any upstream body -> NormalizedResult.

The body shape is decided once here (JSON value, HTML text, or something opaque)
and dispatched to the structure walker or the HTML extractor. Never raises.
"""
import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from seastyle.core.constants import STATUS_KEYS, STATUS_LABELS
from seastyle.services.normalize.html import extract_from_html
from seastyle.services.normalize.status import DEFAULT_NUMERIC_POLICY, NumericStatusPolicy
from seastyle.services.normalize.types import Group, NormalizedResult, Summary
from seastyle.services.normalize.walker import extract_groups


@dataclass(frozen=True)
class JsonPayload:
    value: Any


@dataclass(frozen=True)
class HtmlPayload:
    text: str


@dataclass(frozen=True)
class OpaquePayload:
    value: Any


def detect_payload(payload: Any) -> JsonPayload | HtmlPayload | OpaquePayload:
    """Tag a raw body. JSON text (object/array) counts as JSON; other text as markup."""
    if isinstance(payload, (list, tuple, Mapping)):
        return JsonPayload(payload)
    if isinstance(payload, str):
        stripped = payload.strip()
        if stripped[:1] in ("{", "["):
            try:
                return JsonPayload(json.loads(stripped))
            except ValueError:
                pass
        return HtmlPayload(payload)
    return OpaquePayload(payload)


def summarize(groups: Iterable[Group]) -> Summary:
    """Count slots per status key across all groups. Pure; never read from upstream."""
    statuses = {key: 0 for key in STATUS_KEYS}
    for group in groups:
        for slot in group.slots:
            statuses[slot.status_key] = statuses.get(slot.status_key, 0) + 1
    return Summary(total=sum(statuses.values()), statuses=statuses)


def normalize(payload: Any, *, numeric_policy: NumericStatusPolicy = DEFAULT_NUMERIC_POLICY) -> NormalizedResult:
    """Normalize one day's upstream body. numeric_policy maps numeric status codes in JSON records."""
    if payload is None:
        return NormalizedResult(groups=(), summary=Summary.empty(), raw=None)
    tagged = detect_payload(payload)
    if isinstance(tagged, JsonPayload):
        groups = extract_groups(tagged.value, numeric_policy=numeric_policy)
    elif isinstance(tagged, HtmlPayload):
        groups = extract_from_html(tagged.text)
    else:
        groups = []
    return NormalizedResult(groups=tuple(groups), summary=summarize(groups), raw=payload)


def format_summary(summary: Summary) -> str:
    """One-line Japanese summary: "空き 3 / 残りわずか 1 / 全4枠"."""
    if summary is None or summary.total == 0:
        return "空き情報なし"
    parts = [
        f"{STATUS_LABELS[key]} {summary.statuses[key]}"
        for key in STATUS_KEYS
        if summary.statuses.get(key)
    ]
    parts.append(f"全{summary.total}枠")
    return " / ".join(parts)
