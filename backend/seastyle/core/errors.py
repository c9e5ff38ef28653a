"""
Centralized error types for upstream fetches and their HTTP mapping.
Constants and a reusable helper so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from typing import Callable

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------


class SeaStyleError(Exception):
    """Base for every failure raised while talking to the Sea-Style service."""


class TransportError(SeaStyleError):
    """Non-success HTTP status or network failure for one request."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class EmptyResponseError(TransportError):
    """Success status but nothing usable in the body."""


class CancellationError(SeaStyleError):
    """The caller's cancel signal fired. Never retried."""


class NoStrategySucceededError(SeaStyleError):
    """Every strategy in a chain failed. __cause__ is the last failure."""

    def __init__(self, message: str, errors: list[SeaStyleError] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])

    @property
    def last_error(self) -> SeaStyleError | None:
        return self.errors[-1] if self.errors else None


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_CLIENT_CLOSED = 499  # nginx convention for "client went away"
STATUS_INTERNAL_ERROR = 500
STATUS_BAD_GATEWAY = 502

MSG_UPSTREAM_EXHAUSTED = "Sea-Style から空き情報を取得できませんでした。時間をおいて再度お試しください。"
MSG_CANCELLED = "取得を中断しました。"


# ---------------------------------------------------------------------------
# Error rules: (predicate, status_code, detail_message)
# Add new rules here instead of scattering checks in routes.
# detail None means "use str(exc)".
# ---------------------------------------------------------------------------

def _is_exhausted(exc: Exception) -> bool:
    return isinstance(exc, NoStrategySucceededError)


def _is_cancelled(exc: Exception) -> bool:
    return isinstance(exc, CancellationError)


def _is_transport(exc: Exception) -> bool:
    return isinstance(exc, TransportError)


def _is_invalid_input(exc: Exception) -> bool:
    return isinstance(exc, ValueError)


# First match wins.
SEASTYLE_ERROR_RULES: list[tuple[Callable[[Exception], bool], int, str | None]] = [
    (_is_exhausted, STATUS_BAD_GATEWAY, MSG_UPSTREAM_EXHAUSTED),
    (_is_cancelled, STATUS_CLIENT_CLOSED, MSG_CANCELLED),
    (_is_transport, STATUS_BAD_GATEWAY, None),
    (_is_invalid_input, STATUS_BAD_REQUEST, None),
]


def seastyle_error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception from a fetch into an HTTPException.
    Uses SEASTYLE_ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    msg = str(exc)
    for predicate, status_code, detail in SEASTYLE_ERROR_RULES:
        if predicate(exc):
            return HTTPException(status_code=status_code, detail=detail or msg)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=msg)
