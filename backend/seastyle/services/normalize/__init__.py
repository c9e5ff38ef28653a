"""
Availability normalization: upstream bodies of any shape -> Groups of Slots + Summary.
Classification and time parsing are pure functions; nothing here does I/O or raises.
"""
from seastyle.services.normalize.html import extract_from_html
from seastyle.services.normalize.payload import format_summary, normalize, summarize
from seastyle.services.normalize.slots import build_slot
from seastyle.services.normalize.status import (
    DEFAULT_NUMERIC_POLICY,
    NumericStatusPolicy,
    StatusResult,
    classify,
)
from seastyle.services.normalize.time_text import build_sort_key, normalize_time
from seastyle.services.normalize.types import (
    DebugInfo,
    Group,
    MarinaDirectory,
    MarinaEntry,
    NormalizedResult,
    Slot,
    Summary,
)
from seastyle.services.normalize.walker import extract_groups

__all__ = [
    "DEFAULT_NUMERIC_POLICY",
    "DebugInfo",
    "Group",
    "MarinaDirectory",
    "MarinaEntry",
    "NormalizedResult",
    "NumericStatusPolicy",
    "Slot",
    "StatusResult",
    "Summary",
    "build_slot",
    "build_sort_key",
    "classify",
    "extract_from_html",
    "extract_groups",
    "format_summary",
    "normalize",
    "normalize_time",
    "summarize",
]
