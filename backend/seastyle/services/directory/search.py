"""
Marina typeahead search over a normalized directory.

Matching is on normalized keywords: NFKC, lower case, hiragana folded to
katakana, whitespace removed, so "かちどき" finds "カチドキマリーナ".
"""
import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from seastyle.core.constants import FALLBACK_MARINAS, MAX_SUGGESTIONS
from seastyle.core.errors import CancellationError, SeaStyleError
from seastyle.services.normalize.types import MarinaEntry

logger = logging.getLogger(__name__)

_HIRAGANA_RE = re.compile(r"[ぁ-ゖ]")
_WHITESPACE_RE = re.compile(r"\s+")
_BRACKETS_RE = re.compile(r"[()（）［］「」【】『』]")
_FRAGMENT_SPLIT_RE = re.compile(r"[\s・,、]+")


def normalize_search_text(value: Any) -> str:
    if value is None:
        return ""
    s = unicodedata.normalize("NFKC", str(value)).strip().lower()
    if not s:
        return ""
    s = _HIRAGANA_RE.sub(lambda m: chr(ord(m.group(0)) + 0x60), s)
    return _WHITESPACE_RE.sub("", s)


def build_keywords(entry: MarinaEntry) -> tuple[str, ...]:
    """Search keywords: every identifying field plus fragments of the name."""
    keywords: dict[str, None] = {}
    for value in (entry.code, entry.name, entry.name_kana, entry.prefecture, entry.area):
        k = normalize_search_text(value)
        if k:
            keywords[k] = None
    if entry.name:
        for fragment in _FRAGMENT_SPLIT_RE.split(_BRACKETS_RE.sub(" ", entry.name)):
            k = normalize_search_text(fragment)
            if k:
                keywords[k] = None
    return tuple(keywords)


def entry_from_mapping(data: Mapping[str, Any]) -> MarinaEntry | None:
    """MarinaEntry from a plain dict (fallback list, query params); None without code or name."""
    code = str(data.get("code") or "").strip()
    name = str(data.get("name") or "").strip()
    if not code or not name:
        return None

    def opt(key: str) -> str | None:
        v = data.get(key)
        return str(v).strip() or None if v else None

    return MarinaEntry(
        code=code,
        name=name,
        name_kana=opt("nameKana"),
        prefecture=opt("prefecture"),
        area=opt("area"),
        raw=dict(data),
    )


class MarinaSearch:
    """Directory entries sorted by name, with keyword lookups for the marina picker."""

    def __init__(self, entries: Iterable[MarinaEntry] = ()) -> None:
        self._entries: list[MarinaEntry] = []
        self._keywords: dict[str, tuple[str, ...]] = {}
        self.set_entries(entries)

    def set_entries(self, entries: Iterable[MarinaEntry]) -> None:
        prepared = [e for e in entries if e is not None and e.code and e.name]
        prepared.sort(key=lambda e: normalize_search_text(e.name))
        self._entries = prepared
        self._keywords = {e.code: build_keywords(e) for e in prepared}

    @property
    def entries(self) -> list[MarinaEntry]:
        return list(self._entries)

    def keywords(self, entry: MarinaEntry) -> tuple[str, ...]:
        return self._keywords.get(entry.code) or build_keywords(entry)

    def find_by_code(self, code: Any) -> MarinaEntry | None:
        if code is None:
            return None
        normalized = str(code).strip()
        if not normalized:
            return None
        return next((e for e in self._entries if e.code == normalized), None)

    def find_exact_match(self, value: Any) -> MarinaEntry | None:
        normalized = normalize_search_text(value)
        if not normalized:
            return None
        for e in self._entries:
            if normalize_search_text(e.name) == normalized:
                return e
        return next((e for e in self._entries if normalized in self.keywords(e)), None)

    def find_first_match(self, value: Any) -> MarinaEntry | None:
        normalized = normalize_search_text(value)
        if not normalized:
            return None
        return next(
            (e for e in self._entries if any(normalized in k for k in self.keywords(e))),
            None,
        )

    def suggest(self, query: Any, limit: int = MAX_SUGGESTIONS) -> list[MarinaEntry]:
        """Ranked matches: exact keyword, then prefix, then earliest match position, then name."""
        normalized = normalize_search_text(query)
        if not normalized:
            return self._entries[:limit]
        scored: list[tuple[bool, bool, int, str, MarinaEntry]] = []
        for e in self._entries:
            positions = [k.find(normalized) for k in self.keywords(e)]
            hits = [p for p in positions if p >= 0]
            if not hits:
                continue
            exact = normalized in self.keywords(e)
            starts = 0 in hits
            scored.append((not exact, not starts, min(hits), normalize_search_text(e.name), e))
        scored.sort(key=lambda item: item[:4])
        return [item[4] for item in scored[:limit]]

    def resolve(self, code: Any = None, name: Any = None, default_name: Any = None) -> MarinaEntry | None:
        """Pick an entry by code, else by name (exact then partial), else by default name."""
        return (
            self.find_by_code(code)
            or self.find_exact_match(name)
            or self.find_first_match(name)
            or self.find_first_match(default_name)
        )


@dataclass(frozen=True)
class DirectoryLoad:
    entries: tuple[MarinaEntry, ...]
    used_fallback: bool
    error: Exception | None = None


def fallback_entries() -> tuple[MarinaEntry, ...]:
    return tuple(e for e in (entry_from_mapping(m) for m in FALLBACK_MARINAS) if e is not None)


async def load_directory(client: Any, *, signal: Any = None) -> DirectoryLoad:
    """
    Fetch the marina directory; on failure or an empty list use the built-in
    fallback marinas so the picker still works. Cancellation propagates.
    """
    try:
        directory = await client.fetch_marina_directory(signal=signal)
    except CancellationError:
        raise
    except SeaStyleError as e:
        logger.warning("Marina directory fetch failed, using fallback list: %s", e)
        return DirectoryLoad(entries=fallback_entries(), used_fallback=True, error=e)
    if not directory.marinas:
        logger.warning("Marina directory empty, using fallback list")
        return DirectoryLoad(entries=fallback_entries(), used_fallback=True)
    return DirectoryLoad(entries=tuple(directory.marinas), used_fallback=False)
