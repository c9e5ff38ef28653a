"""
Availability API: one day or a whole month for a marina.

Mounted under /availability. Upstream failures map to HTTP errors via seastyle_error_to_http.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends

from seastyle.api.deps import get_client
from seastyle.core.errors import SeaStyleError, seastyle_error_to_http
from seastyle.services.upstream import SeaStyleClient, fetch_month_availability

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{marina_cd}/month/{month_id}")
async def month_availability(
    marina_cd: str,
    month_id: str,
    client: SeaStyleClient = Depends(get_client),
) -> dict[str, Any]:
    """Every day of YYYY-MM, fetched serially. Days that failed carry an error instead of groups."""
    try:
        outcomes = await fetch_month_availability(client, marina_cd, month_id)
    except (SeaStyleError, ValueError) as e:
        raise seastyle_error_to_http(e) from e
    failed = sum(1 for o in outcomes if not o.ok)
    return {
        "marinaCd": marina_cd,
        "month": month_id,
        "days": [o.to_dict() for o in outcomes],
        "fetched": len(outcomes) - failed,
        "failed": failed,
    }


@router.get("/{marina_cd}/{iso_date}")
async def day_availability(
    marina_cd: str,
    iso_date: str,
    client: SeaStyleClient = Depends(get_client),
) -> dict[str, Any]:
    """Normalized groups, summary and debug info (strategy, URL, raw payload) for one day."""
    try:
        result = await client.fetch_day_availability(marina_cd, iso_date)
    except (SeaStyleError, ValueError) as e:
        raise seastyle_error_to_http(e) from e
    return {"marinaCd": marina_cd, "date": iso_date, **result.to_dict()}
