"""
Structure walker: find slot arrays anywhere inside an arbitrarily nested JSON value.

The availability endpoint has no documented schema and nests differently per
deployment (boats -> plans -> slots, or a flat list, or a dict keyed by boat).
Breadth-first over an explicit queue of (value, title); visited by id() so shared
or cyclic references are walked once.
"""
from collections import deque
from typing import Any, Mapping

from seastyle.services.normalize.slots import build_slot, humanize_key, merge_groups
from seastyle.services.normalize.status import DEFAULT_NUMERIC_POLICY, NumericStatusPolicy
from seastyle.services.normalize.types import Group, Slot

# Name-like fields used as a group title for the slots below them
TITLE_FIELDS = ("boatName", "menuName", "goodsName", "itemName", "title")

# Wrapper keys that say nothing about the content; children keep the parent title
GENERIC_CONTAINER_KEYS = frozenset(
    {"data", "result", "results", "items", "list", "body", "response", "payload", "value", "values", "d"}
)


def infer_title(value: Any) -> str | None:
    """Own name of a node (boatName, menuName, ...), or None."""
    if not isinstance(value, Mapping):
        return None
    for name in TITLE_FIELDS:
        v = value.get(name)
        if isinstance(v, str) and v.strip():
            return v.strip()
    return None


def _child_title(child: Any, key: Any, parent_title: str | None, parent_own_title: str | None) -> str | None:
    own = infer_title(child)
    if own:
        return own
    if parent_own_title:
        return parent_own_title
    if isinstance(key, str) and key.strip().lower() in GENERIC_CONTAINER_KEYS:
        return parent_title
    return humanize_key(key) or parent_title


def extract_groups(payload: Any, *, numeric_policy: NumericStatusPolicy = DEFAULT_NUMERIC_POLICY) -> list[Group]:
    """All slot arrays in payload as Groups, merged by title, slots sorted."""
    found: list[tuple[str | None, list[Slot]]] = []
    queue: deque[tuple[Any, str | None]] = deque([(payload, None)])
    visited: set[int] = set()

    while queue:
        value, title = queue.popleft()
        if not isinstance(value, (list, tuple, Mapping)):
            continue
        if id(value) in visited:
            continue
        visited.add(id(value))

        if isinstance(value, (list, tuple)):
            built = (build_slot(item, title, numeric_policy=numeric_policy) for item in value)
            slots = [s for s in built if s is not None]
            if slots:
                found.append((title, slots))
                continue
            for item in value:
                if isinstance(item, (list, tuple, Mapping)):
                    queue.append((item, infer_title(item) or title))
            continue

        own_title = infer_title(value)
        for key, child in value.items():
            if isinstance(child, (list, tuple, Mapping)):
                queue.append((child, _child_title(child, key, title, own_title)))

    return merge_groups(found)
