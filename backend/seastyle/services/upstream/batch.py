"""Month batch: one marina, every day of a month, fetched one day at a time."""
import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from seastyle.core.errors import CancellationError, SeaStyleError
from seastyle.services.normalize.types import NormalizedResult
from seastyle.services.upstream.base import CancelSignal

logger = logging.getLogger(__name__)

_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


@dataclass(frozen=True)
class DayOutcome:
    day: date
    result: NormalizedResult | None = None
    error: SeaStyleError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"date": self.day.isoformat()}
        if self.error is not None:
            out["error"] = str(self.error)
        if self.result is not None:
            out.update(self.result.to_dict())
        return out


ProgressCallback = Callable[[int, int, DayOutcome], None]


def month_days(month_id: str) -> list[date]:
    """Every date of "YYYY-MM"."""
    m = _MONTH_RE.match((month_id or "").strip())
    if not m:
        raise ValueError(f"Invalid month {month_id!r}. Use YYYY-MM.")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month_id!r}. Use YYYY-MM.")
    _, last = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, last + 1)]


async def fetch_month_availability(
    client: Any,
    marina_cd: str,
    month_id: str,
    *,
    signal: CancelSignal | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[DayOutcome]:
    """
    Fetch each day serially so one cancel signal stops the rest cleanly.
    A failed day is recorded and the batch continues; cancellation raises and
    leaves already-reported days as they are.
    """
    days = month_days(month_id)
    outcomes: list[DayOutcome] = []
    for index, day in enumerate(days):
        if signal is not None:
            signal.raise_if_cancelled()
        try:
            result = await client.fetch_day_availability(marina_cd, day, signal=signal)
            outcome = DayOutcome(day=day, result=result)
        except CancellationError:
            logger.info("Month batch %s %s cancelled after %d day(s)", marina_cd, month_id, len(outcomes))
            raise
        except SeaStyleError as e:
            logger.warning("Availability %s %s failed: %s", marina_cd, day.isoformat(), e)
            outcome = DayOutcome(day=day, error=e)
        outcomes.append(outcome)
        if on_progress is not None:
            on_progress(index, len(days), outcome)
    return outcomes
