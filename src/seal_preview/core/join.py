"""Parallel join of independent async operations.

Every operation is started at once and always runs to completion; a failing
operation never short-circuits its siblings.  Once all have settled the join
either returns ``{key: result}`` for every key or raises ``JoinFailure`` with
``{key: exception}`` for the failed keys only.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, Union

from seal_preview.exceptions import JoinFailure

log = logging.getLogger(__name__)

T = TypeVar("T")

# A zero-argument coroutine function (or any callable returning an awaitable),
# or an awaitable that has not been awaited yet.
AsyncOp = Union[Callable[[], Awaitable[T]], Awaitable[T]]


@dataclass
class JoinOutcome:
    """Settlement slot for one operation of a join."""

    key: str
    error: BaseException | None = None
    data: Any = None
    settled: bool = False

    def settle(self, *, data: Any = None, error: BaseException | None = None) -> None:
        if self.settled:
            log.warning(f"Ignoring second completion of join operation '{self.key}'")
            return
        self.data = data
        self.error = error
        self.settled = True


async def _start(op: AsyncOp[T]) -> T:
    if inspect.isawaitable(op):
        return await op
    if callable(op):
        return await op()
    raise TypeError(f"Expected an awaitable or a callable returning one, got {type(op).__name__}")


async def _run(outcome: JoinOutcome, op: AsyncOp[Any]) -> None:
    try:
        data = await _start(op)
    except Exception as e:
        outcome.settle(error=e)
    else:
        outcome.settle(data=data)


async def join(ops: Mapping[str, AsyncOp[T]]) -> dict[str, T]:
    """Run every operation in *ops* concurrently and join their outcomes.

    Args:
        ops: Mapping of operation key to an async operation.  Keys impose no
            ordering on execution.

    Returns:
        ``{key: result}`` for every key when all operations succeeded.  An
        empty mapping completes immediately with ``{}``.

    Raises:
        JoinFailure: After *all* operations settled, if any of them failed.
            ``JoinFailure.errors`` holds the failed keys only.
    """
    # Outcome slots are fixed at construction, indexed by key position.
    outcomes = [JoinOutcome(key=key) for key in ops]
    if not outcomes:
        return {}

    await asyncio.gather(*(_run(outcome, ops[outcome.key]) for outcome in outcomes))

    errors = {o.key: o.error for o in outcomes if o.error is not None}
    if errors:
        log.debug(f"Join finished with {len(errors)}/{len(outcomes)} failed: {sorted(errors)}")
        raise JoinFailure(errors)
    return {o.key: o.data for o in outcomes}
