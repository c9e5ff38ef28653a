"""
First-success strategy chain.

Sea-Style has several endpoints and body shapes for the same data and which one
answers depends on the deployment. A chain tries strategies in order and returns
the first usable result; failures are collected, cancellation stops everything.
"""
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from seastyle.core.errors import CancellationError, NoStrategySucceededError, SeaStyleError
from seastyle.services.upstream.base import CancelSignal

logger = logging.getLogger(__name__)

C = TypeVar("C")
T = TypeVar("T")


@dataclass(frozen=True)
class Strategy(Generic[C]):
    """One way of asking upstream for the data: a name for diagnostics and a coroutine over the shared context."""

    name: str
    run: Callable[[C], Awaitable[Any]]


@dataclass(frozen=True)
class ChainOutcome(Generic[T]):
    value: T
    strategy: str
    errors: tuple[SeaStyleError, ...] = ()


async def first_success(
    strategies: Sequence[Strategy[C]],
    context: C,
    *,
    signal: CancelSignal | None = None,
    accept: Callable[[Any], T] | None = None,
    label: str = "chain",
) -> ChainOutcome[T]:
    """
    Run strategies in order until one succeeds.

    accept(value) may transform a strategy's value or reject it by raising a
    SeaStyleError (e.g. EmptyResponseError); a rejection counts as a failure.
    Raises CancellationError as soon as the signal fires, and
    NoStrategySucceededError (caused by the last failure) when all fail.
    """
    errors: list[SeaStyleError] = []
    for strategy in strategies:
        if signal is not None:
            signal.raise_if_cancelled()
        try:
            value = await strategy.run(context)
            if accept is not None:
                value = accept(value)
        except CancellationError:
            raise
        except SeaStyleError as e:
            logger.warning("%s: strategy %s failed: %s", label, strategy.name, e)
            errors.append(e)
            continue
        if errors:
            logger.info("%s: strategy %s succeeded after %d failure(s)", label, strategy.name, len(errors))
        return ChainOutcome(value=value, strategy=strategy.name, errors=tuple(errors))

    if not errors:
        raise NoStrategySucceededError(f"{label}: no data (no strategies to try)")
    raise NoStrategySucceededError(
        f"{label}: all {len(errors)} strategies failed; last error: {errors[-1]}",
        errors,
    ) from errors[-1]
