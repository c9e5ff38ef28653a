"""Transport protocol, cancel signal and the fetched-body shape shared by all strategies."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from seastyle.core.errors import CancellationError


class CancelSignal:
    """Cooperative cancellation token shared by every request of one batch."""

    __slots__ = ("_cancelled", "reason")

    def __init__(self) -> None:
        self._cancelled = False
        self.reason = ""

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self, reason: str = "cancelled") -> None:
        self._cancelled = True
        self.reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancellationError(self.reason or "cancelled")


class Transport(Protocol):
    """Sends one HTTP request. Status handling and decoding are the client's job."""

    async def __call__(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json: Any = None,
        signal: CancelSignal | None = None,
    ) -> httpx.Response:
        ...


@dataclass(frozen=True)
class Fetched:
    """A successful, non-empty upstream response."""

    url: str
    payload: Any
    headers: dict[str, str] = field(default_factory=dict)
