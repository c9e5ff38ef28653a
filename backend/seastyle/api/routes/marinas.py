"""
Marina directory API: full list plus typeahead suggestions for ?q=.
Falls back to the built-in marina list when upstream cannot be read.
"""
from typing import Any

from fastapi import APIRouter, Depends, Query

from seastyle.api.deps import get_client
from seastyle.core.constants import DEFAULT_MARINA_NAME, MAX_SUGGESTIONS
from seastyle.core.errors import CancellationError, seastyle_error_to_http
from seastyle.services.directory import MarinaSearch, load_directory
from seastyle.services.upstream import SeaStyleClient

router = APIRouter()


@router.get("")
async def list_marinas(
    q: str | None = Query(None),
    code: str | None = Query(None),
    limit: int = Query(MAX_SUGGESTIONS, ge=1, le=100),
    client: SeaStyleClient = Depends(get_client),
) -> dict[str, Any]:
    """
    Marinas sorted by name. With q: ranked suggestions. "selected" is the entry for code,
    else the best match for q, else the default marina (勝どきマリーナ) when listed.
    """
    try:
        loaded = await load_directory(client)
    except CancellationError as e:
        raise seastyle_error_to_http(e) from e
    search = MarinaSearch(loaded.entries)
    out: dict[str, Any] = {
        "marinas": [e.to_dict() for e in search.entries],
        "usedFallback": loaded.used_fallback,
        "error": str(loaded.error) if loaded.error else None,
    }
    if q is not None:
        out["suggestions"] = [e.to_dict() for e in search.suggest(q, limit)]
    selected = search.resolve(code=code, name=q, default_name=DEFAULT_MARINA_NAME)
    out["selected"] = selected.to_dict() if selected else None
    return out
