"""Ops that run several ops concurrently on the same input."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from .op import Op


async def _join(*calls: Any) -> tuple[Any, ...]:
    """Await ``calls`` concurrently; on the first failure cancel the rest and raise."""
    tasks = [asyncio.ensure_future(call) for call in calls]
    try:
        return tuple(await asyncio.gather(*tasks))
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()


@dataclass
class Parallel(Op):
    """Runs ``op1`` and ``op2`` concurrently on the same input.

    The output is the pair of their outputs. If either op raises, the other
    is cancelled and the error propagates.
    """

    op1: Op
    op2: Op

    async def call(self, input: Any) -> tuple[Any, Any]:
        return await _join(self.op1.call(input), self.op2.call(input))

    async def try_call(self, input: Any) -> tuple[Any, Any]:
        return await _join(self.op1.try_call(input), self.op2.try_call(input))


def _nest(ops: tuple[Op, ...]) -> Parallel:
    if len(ops) < 2:
        raise ValueError(f"parallel needs at least two ops, got {len(ops)}")
    first, *rest = ops
    if len(rest) == 1:
        return Parallel(first, rest[0])
    return Parallel(first, _nest(tuple(rest)))


def _flattener(count: int):
    def flatten(output: Any) -> tuple[Any, ...]:
        values = []
        for _ in range(count - 1):
            head, output = output
            values.append(head)
        values.append(output)
        return tuple(values)

    return flatten


def parallel(*args: Op) -> Op:
    """Combine ops into one that runs them all concurrently on its input.

    The output is a flat tuple with one entry per op, in the order given.
    """
    return _nest(args).map(_flattener(len(args)))


def try_parallel(*args: Op) -> Op:
    """Like :func:`parallel`, but the first failing op fails the whole op."""
    return _nest(args).map_ok(_flattener(len(args)))