"""
Availability status classifier.

Upstream reports status as booleans, numeric codes, reservation symbols (◯ △ ×)
or free text. Everything is reduced to one of vacant / few / full / unknown.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, NamedTuple

from seastyle.core.constants import (
    STATUS_FEW,
    STATUS_FULL,
    STATUS_LABELS,
    STATUS_UNKNOWN,
    STATUS_VACANT,
)


class StatusResult(NamedTuple):
    key: str
    label: str
    original: Any = None  # input value, kept for every non-None classification


@dataclass(frozen=True)
class NumericStatusPolicy:
    """
    Mapping for numeric status codes. 0/1/2+ is what the reservation site has been
    observed to send; not documented upstream, so deployments may pass their own policy.
    """

    vacant_code: float = 0
    few_code: float = 1
    full_from: float = 2

    def key_for(self, value: int | float) -> str | None:
        """Status key for a numeric code, or None to fall back to text classification."""
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if value < 0:
            return None
        if value == self.vacant_code:
            return STATUS_VACANT
        if value == self.few_code:
            return STATUS_FEW
        if value >= self.full_from:
            return STATUS_FULL
        return None


DEFAULT_NUMERIC_POLICY = NumericStatusPolicy()

# (key, pattern) in priority order; first match wins.
# 不可 / unavailable must not read as vacant via 可 / available.
STATUS_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (STATUS_VACANT, re.compile(r"[◯○◎〇]|(?<!不)可|空|余裕|余|(?<!un)available|vacant")),
    (STATUS_FEW, re.compile(r"△|残|僅|少|few|less|わずか")),
    (STATUS_FULL, re.compile(r"[×✕✖✗╳]|満|無|full|不可|締")),
]


def _result(key: str, original: Any) -> StatusResult:
    return StatusResult(key=key, label=STATUS_LABELS[key], original=original)


def classify_text(text: str) -> str:
    """Status key for free text (trimmed, case-folded)."""
    normalized = (text or "").strip().casefold()
    if not normalized:
        return STATUS_UNKNOWN
    for key, pattern in STATUS_PATTERNS:
        if pattern.search(normalized):
            return key
    return STATUS_UNKNOWN


def classify(value: Any, *, numeric_policy: NumericStatusPolicy = DEFAULT_NUMERIC_POLICY) -> StatusResult:
    """Classify any raw status value. Never raises."""
    if value is None:
        return StatusResult(key=STATUS_UNKNOWN, label=STATUS_LABELS[STATUS_UNKNOWN])
    # bool before int: True/False are ints too
    if isinstance(value, bool):
        return _result(STATUS_VACANT if value else STATUS_FULL, value)
    if isinstance(value, (int, float)):
        key = numeric_policy.key_for(value)
        if key is not None:
            return _result(key, value)
        return _result(classify_text(str(value)), value)
    return _result(classify_text(str(value)), value)


def is_known(result: StatusResult) -> bool:
    return result.key != STATUS_UNKNOWN
