"""Bounded fan-out with per-call timeouts.

Fires a batch of coroutines, bounds how many run at once with a semaphore
created per call, and folds each result into a tagged ``Outcome`` so that
no exception escapes the fan-out. Callers keep the successes and log the
rest.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Generic, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    FAILURE = "failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a single sub-call."""
    status: OutcomeStatus
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS


async def gather_outcomes(
    calls: Sequence[Awaitable[T]],
    timeout: float,
    limit: int | None = None,
) -> list[Outcome[T]]:
    """Run ``calls`` concurrently and return one ``Outcome`` per call, in order.

    Args:
        calls: Awaitables to run.
        timeout: Per-call timeout in seconds. A call exceeding it is tagged
            ``TIMEOUT`` and cancelled.
        limit: Maximum number of calls in flight. Defaults to all of them.

    Cancelling the caller cancels every call still in flight.
    """
    if not calls:
        return []
    semaphore = asyncio.Semaphore(limit or len(calls))

    async def run(call: Awaitable[Any]) -> Outcome[Any]:
        async with semaphore:
            try:
                value = await asyncio.wait_for(call, timeout)
            except asyncio.TimeoutError as e:
                return Outcome(OutcomeStatus.TIMEOUT, error=e)
            except Exception as e:
                return Outcome(OutcomeStatus.FAILURE, error=e)
            return Outcome(OutcomeStatus.SUCCESS, value=value)

    return list(await asyncio.gather(*(run(c) for c in calls)))


def successes(outcomes: Sequence[Outcome[T]], label: str = "call") -> list[T]:
    """Values of the successful outcomes, logging the others."""
    values: list[T] = []
    for i, outcome in enumerate(outcomes):
        if outcome.ok:
            values.append(outcome.value)  # type: ignore[arg-type]
        else:
            logger.info(f"[FANOUT] {label} #{i} dropped ({outcome.status.value}): {outcome.error!r}")
    return values
