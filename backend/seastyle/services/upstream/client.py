"""Sea-Style API client: sends requests through an injectable transport and runs the strategy chains."""
import logging
from dataclasses import replace
from datetime import date
from typing import Any, Sequence

import httpx

from seastyle.core.errors import CancellationError, EmptyResponseError, TransportError
from seastyle.services.directory.normalize import normalize_directory
from seastyle.services.normalize import normalize
from seastyle.services.normalize.status import DEFAULT_NUMERIC_POLICY, NumericStatusPolicy
from seastyle.services.normalize.types import DebugInfo, MarinaDirectory, MarinaEntry, NormalizedResult
from seastyle.services.upstream.base import CancelSignal, Fetched, Transport
from seastyle.services.upstream.chain import Strategy, first_success
from seastyle.services.upstream.config import SeaStyleConfig
from seastyle.services.upstream.strategies import (
    DayContext,
    DirectoryContext,
    day_strategies as default_day_strategies,
    directory_strategies as default_directory_strategies,
)

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Default transport: httpx.AsyncClient, one short-lived client per request unless one is given."""

    def __init__(self, client: httpx.AsyncClient | None = None, *, timeout: float = 20.0) -> None:
        self._client = client
        self._timeout = timeout

    async def __call__(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json: Any = None,
        signal: CancelSignal | None = None,
    ) -> httpx.Response:
        if signal is not None:
            signal.raise_if_cancelled()
        if self._client is not None:
            return await self._client.request(method, url, headers=headers, json=json)
        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            return await client.request(method, url, headers=headers, json=json)


def _parse_day(value: Any) -> date:
    if isinstance(value, date):
        return value
    s = str(value or "").strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise ValueError(f"Invalid or missing date {value!r}. Use YYYY-MM-DD.") from None


def _marina_code(value: Any) -> str:
    s = str(value or "").strip()
    if not s:
        raise ValueError("marinaCd must be a non-empty string.")
    return s


def _decode_body(response: httpx.Response, url: str) -> Any:
    """JSON when the body parses as JSON, text otherwise. Empty body -> EmptyResponseError."""
    text = response.text
    if not text or not text.strip():
        raise EmptyResponseError(
            f"Sea-Style returned an empty body ({response.status_code})",
            status_code=response.status_code,
            url=url,
        )
    try:
        return response.json()
    except ValueError:
        return text


class SeaStyleClient:
    """Day availability and marina directory for the Sea-Style reservation site."""

    def __init__(
        self,
        config: SeaStyleConfig | None = None,
        *,
        transport: Transport | None = None,
        day_strategies: Sequence[Strategy[DayContext]] | None = None,
        directory_strategies: Sequence[Strategy[DirectoryContext]] | None = None,
        numeric_policy: NumericStatusPolicy = DEFAULT_NUMERIC_POLICY,
    ) -> None:
        self._config = config or SeaStyleConfig()
        self._numeric_policy = numeric_policy
        self._transport = transport or HttpxTransport(timeout=self._config.timeout)
        self._day_strategies = list(day_strategies) if day_strategies is not None else default_day_strategies()
        self._directory_strategies = (
            list(directory_strategies) if directory_strategies is not None else default_directory_strategies()
        )

    @property
    def config(self) -> SeaStyleConfig:
        return self._config

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        signal: CancelSignal | None = None,
    ) -> Fetched:
        """One upstream call. Non-2xx, any transport failure and empty bodies raise TransportError subclasses."""
        url = self._config.build_url(path, params)
        if signal is not None:
            signal.raise_if_cancelled()
        headers = self._config.headers(json_body=json is not None)
        try:
            response = await self._transport(method, url, headers=headers, json=json, signal=signal)
        except CancellationError:
            raise
        except Exception as e:
            # httpx errors, OSError, InvalidURL or anything an injected transport raises: next strategy
            raise TransportError(f"Sea-Style request failed: {e}", url=url) from e
        if signal is not None:
            signal.raise_if_cancelled()
        if not response.is_success:
            raise TransportError(
                f"Sea-Style API error: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        payload = _decode_body(response, url)
        return Fetched(url=url, payload=payload, headers=dict(response.headers))

    async def fetch_day_availability(
        self,
        marina_cd: str,
        iso_date: Any,
        *,
        signal: CancelSignal | None = None,
    ) -> NormalizedResult:
        """Normalized availability for one marina and day, with the answering strategy in .debug."""
        ctx = DayContext(client=self, marina_cd=_marina_code(marina_cd), day=_parse_day(iso_date), signal=signal)
        outcome = await first_success(
            self._day_strategies,
            ctx,
            signal=signal,
            label=f"availability {ctx.marina_cd} {ctx.day.isoformat()}",
        )
        fetched: Fetched = outcome.value
        result = normalize(fetched.payload, numeric_policy=self._numeric_policy)
        logger.info(
            "Availability %s %s via %s: %d group(s), %d slot(s)",
            ctx.marina_cd,
            ctx.day.isoformat(),
            outcome.strategy,
            len(result.groups),
            result.summary.total,
        )
        debug = DebugInfo(
            strategy=outcome.strategy,
            url=fetched.url,
            raw_payload=fetched.payload,
            headers=fetched.headers,
            errors=tuple(str(e) for e in outcome.errors),
        )
        return replace(result, debug=debug)

    async def fetch_marina_directory(self, *, signal: CancelSignal | None = None) -> MarinaDirectory:
        """Marina directory; a strategy whose payload holds no marinas counts as failed."""

        def accept(fetched: Fetched) -> tuple[Fetched, list[MarinaEntry]]:
            marinas = normalize_directory(fetched.payload)
            if not marinas:
                raise EmptyResponseError("Marina list response contained no marinas", url=fetched.url)
            return fetched, marinas

        outcome = await first_success(
            self._directory_strategies,
            DirectoryContext(client=self, signal=signal),
            signal=signal,
            accept=accept,
            label="marina directory",
        )
        fetched, marinas = outcome.value
        logger.info("Marina directory via %s: %d marina(s)", outcome.strategy, len(marinas))
        meta = DebugInfo(
            strategy=outcome.strategy,
            url=fetched.url,
            raw_payload=fetched.payload,
            headers=fetched.headers,
            errors=tuple(str(e) for e in outcome.errors),
        )
        return MarinaDirectory(marinas=tuple(marinas), meta=meta)
