"""
Marina directory normalizer: GetMarinaList-style payloads -> unique MarinaEntry list.

Marina lists come grouped by prefecture/area at varying depths. Depth-first over an
explicit stack of (node, context); prefecture/area flow down to children that
do not carry their own. First entry seen for a code wins.
"""
import logging
from typing import Any, Mapping, NamedTuple

from seastyle.services.normalize.types import MarinaEntry

logger = logging.getLogger(__name__)

CODE_FIELDS = ("marinaCd", "marinaCode", "marinaID", "marinaId", "code", "id", "value")
NAME_FIELDS = ("marinaName", "name", "label", "text")
KANA_FIELDS = ("marinaNameKana", "nameKana", "marinaKana", "kana")
PREFECTURE_FIELDS = ("prefecture", "prefectureName", "prefName", "pref")
AREA_FIELDS = ("area", "areaName", "region", "regionName")


class _Context(NamedTuple):
    prefecture: str | None = None
    area: str | None = None


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        s = str(value).strip()
        return s or None
    return None


def _first(node: Mapping[str, Any], fields: tuple[str, ...]) -> str | None:
    for name in fields:
        s = _text(node.get(name))
        if s:
            return s
    return None


def _children(node: Any) -> list[Any]:
    if isinstance(node, Mapping):
        values = list(node.values())
    else:
        values = list(node)
    return [v for v in values if isinstance(v, (list, tuple, Mapping))]


def normalize_directory(payload: Any) -> list[MarinaEntry]:
    """Unique marinas in first-seen (document) order."""
    by_code: dict[str, MarinaEntry] = {}
    stack: list[tuple[Any, _Context]] = [(payload, _Context())]
    visited: set[int] = set()

    while stack:
        node, context = stack.pop()
        if not isinstance(node, (list, tuple, Mapping)):
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))

        if isinstance(node, Mapping):
            context = _Context(
                prefecture=_first(node, PREFECTURE_FIELDS) or context.prefecture,
                area=_first(node, AREA_FIELDS) or context.area,
            )
            code = _first(node, CODE_FIELDS)
            name = _first(node, NAME_FIELDS)
            if code and name:
                if code in by_code:
                    logger.debug("Duplicate marina code %s (%s) dropped", code, name)
                else:
                    by_code[code] = MarinaEntry(
                        code=code,
                        name=name,
                        name_kana=_first(node, KANA_FIELDS),
                        prefecture=context.prefecture,
                        area=context.area,
                        raw=node,
                    )

        # reversed so the stack pops children in document order
        for child in reversed(_children(node)):
            stack.append((child, context))

    return list(by_code.values())
