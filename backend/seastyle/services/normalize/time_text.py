"""Time text normalization: "9時5分〜10時30分", "9:00-10:00", "0930" etc. -> "HH:MM〜HH:MM"."""
import re

from seastyle.core.constants import TIME_RANGE_SEPARATOR

# Range separators seen upstream (wave dash, tilde, hyphen, long vowel mark, bars, fullwidth tilde)
_SPLIT_RE = re.compile(r"\s*[〜~\-ー―～]\s*")

# One clock value: 9:05, 09：05, 9時5分, 9時. Not preceded by a digit or "+" (UTC offsets).
_CLOCK_PATTERN = r"(?<![\d+])(\d{1,2})\s*[:：時]\s*(\d+)?\s*分?"
_CLOCK_RE = re.compile(_CLOCK_PATTERN)

# A clock, optionally followed by a separator and a second clock. Used to scan free text.
_CLOCK_TEXT = r"(?<![\d+])\d{1,2}\s*[:：時]\s*(?:\d{1,2}\s*分?)?"
_RANGE_SCAN_RE = re.compile(rf"{_CLOCK_TEXT}(?:\s*[〜~\-ー―～]\s*{_CLOCK_TEXT})?")

_DIGITS_RE = re.compile(r"^\d{1,4}$")
_SORT_RE = re.compile(r"(\d{1,2})\s*[:：時]\s*(\d{1,2})")


def _format_clock(hour: str, minute: str | None) -> str:
    minute = (minute or "")[:2]
    return f"{hour.zfill(2)}:{minute.zfill(2)}"


def _normalize_side(text: str) -> str | None:
    """One side of a range -> "HH:MM", or None if it holds no clock value."""
    s = text.strip()
    if not s:
        return None
    if _DIGITS_RE.match(s):
        # bare digits: 9 -> 09:00, 930 -> 09:30, 1030 -> 10:30
        if len(s) <= 2:
            return _format_clock(s, None)
        return _format_clock(s[:-2], s[-2:])
    m = _CLOCK_RE.search(s)
    if not m:
        return None
    return _format_clock(m.group(1), m.group(2))


def normalize_time(text: object) -> str | None:
    """
    Canonical "HH:MM" or "HH:MM〜HH:MM". Returns the trimmed input when no clock value
    can be read, None for empty input.
    """
    if text is None:
        return None
    s = str(text).strip()
    if not s:
        return None
    parts = _SPLIT_RE.split(s)
    if len(parts) <= 2:
        sides = [_normalize_side(p) for p in parts]
    else:
        # Dashes inside dates ("2025-06-01 10:00-11:00"): take the first two clock tokens instead
        sides = [_format_clock(m.group(1), m.group(2)) for m in _CLOCK_RE.finditer(s)][:2]
    found = [side for side in sides if side]
    if not found:
        return s
    if len(found) == 1:
        return found[0]
    return f"{found[0]}{TIME_RANGE_SEPARATOR}{found[1]}"


def find_time_range(text: str) -> str | None:
    """Scan free text for an embedded time or time range and normalize it."""
    if not text:
        return None
    m = _RANGE_SCAN_RE.search(text)
    if not m:
        return None
    return normalize_time(m.group(0))


def build_sort_key(time_text: str | None) -> int | None:
    """Minutes since midnight of the first clock value, or None (sorts last)."""
    if not time_text:
        return None
    m = _SORT_RE.search(time_text)
    if not m:
        return None
    return int(m.group(1)) * 60 + int(m.group(2))
