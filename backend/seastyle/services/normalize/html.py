"""
HTML extractor: availability rendered as markup (format=partial pages) -> Groups.

Tables first: heading before the table is the title, each body row is
time | status | notes... If no table yields anything, fall back to elements
tagged with a time attribute or class.
"""
import logging
import re

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from seastyle.services.normalize.slots import make_slot, merge_groups
from seastyle.services.normalize.status import StatusResult, classify, is_known
from seastyle.services.normalize.time_text import normalize_time
from seastyle.services.normalize.types import Group, Slot

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
TIME_ATTRS = ("data-time", "data-time-range", "data-start-time")
STATUS_ATTRS = ("data-status", "data-state")

_TIME_CLASS_RE = re.compile(r"time", re.IGNORECASE)
_STATUS_CLASS_RE = re.compile(r"status", re.IGNORECASE)


def _text(el: Tag | None) -> str:
    if el is None:
        return ""
    return " ".join(el.get_text(" ", strip=True).split())


def _classes(el: Tag) -> list[str]:
    value = el.get("class") or []
    return list(value) if isinstance(value, list) else str(value).split()


def _is_heading(el: Tag) -> bool:
    if el.name in HEADING_TAGS:
        return True
    return any("title" in c.lower() for c in _classes(el))


def _table_title(table: Tag) -> str | None:
    caption = table.find("caption")
    if caption is not None and _text(caption):
        return _text(caption)
    for sibling in table.find_previous_siblings():
        if not isinstance(sibling, Tag):
            continue
        if _is_heading(sibling) and _text(sibling):
            return _text(sibling)
        inner = sibling.find(_is_heading)
        if inner is not None and _text(inner):
            return _text(inner)
    return None


def _slots_from_table(table: Tag) -> list[Slot]:
    slots: list[Slot] = []
    for row in table.find_all("tr"):
        # only rows belonging to this table, not nested ones
        if row.find_parent("table") is not table:
            continue
        if row.find("th") is not None:
            continue
        cells = row.find_all("td", recursive=False)
        if not cells:
            continue
        time_raw = _text(cells[0])
        status_raw = _text(cells[1]) if len(cells) > 1 else ""
        if not time_raw and not status_raw:
            continue
        note = " ".join(t for t in (_text(c) for c in cells[2:]) if t)
        slot = make_slot(
            time_text=normalize_time(time_raw),
            status=classify(status_raw) if status_raw else classify(None),
            note=note or None,
            boat_name=None,
            raw=str(row),
        )
        if slot is not None:
            slots.append(slot)
    return slots


def _has_time_attr(el: Tag) -> bool:
    return any(el.has_attr(a) for a in TIME_ATTRS)


def _has_time_marker(el: Tag) -> bool:
    if _has_time_attr(el):
        return True
    return any(_TIME_CLASS_RE.search(c) for c in _classes(el))


def _element_status(el: Tag, time_text: str | None) -> StatusResult:
    for attr in STATUS_ATTRS:
        if el.has_attr(attr) and str(el[attr]).strip():
            return classify(str(el[attr]).strip())
    status_el = el.find(class_=_STATUS_CLASS_RE)
    if status_el is not None and _text(status_el):
        return classify(_text(status_el))
    for c in _classes(el):
        if _TIME_CLASS_RE.search(c):
            continue
        result = classify(c)
        if is_known(result):
            return result
    return classify(time_text)


def _slots_from_elements(soup: BeautifulSoup) -> list[tuple[str | None, list[Slot]]]:
    found: list[tuple[str | None, list[Slot]]] = []
    matched: set[int] = set()
    for el in soup.find_all(_has_time_marker):
        # skip elements nested inside one already taken
        if any(id(parent) in matched for parent in el.parents):
            continue
        # a class-only match (e.g. "timetable") wrapping time-marked items is a container
        if not _has_time_attr(el) and el.find(_has_time_marker) is not None:
            continue
        matched.add(id(el))
        time_raw = next((str(el[a]).strip() for a in TIME_ATTRS if el.has_attr(a) and str(el[a]).strip()), "")
        time_text = normalize_time(time_raw or _text(el))
        heading = el.find_previous(_is_heading)
        slot = make_slot(
            time_text=time_text,
            status=_element_status(el, time_text),
            note=None,
            boat_name=None,
            raw=str(el),
        )
        if slot is not None:
            found.append((_text(heading) or None, [slot]))
    return found


def extract_from_html(html_text: str) -> list[Group]:
    """Groups from an HTML fragment. [] when nothing slot-like is present or the markup is rejected."""
    if not html_text or not html_text.strip():
        return []
    try:
        soup = BeautifulSoup(html_text, "html.parser")
    except ParserRejectedMarkup as e:
        logger.warning("HTML availability markup rejected by parser: %s", e)
        return []

    found: list[tuple[str | None, list[Slot]]] = []
    for table in soup.find_all("table"):
        slots = _slots_from_table(table)
        if slots:
            found.append((_table_title(table), slots))
    if not found:
        found = _slots_from_elements(soup)
    return merge_groups(found)
