"""Core pipeline operation and the basic ops it is built from."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any


async def _buffered(
    fn: Callable[[Any], Awaitable[Any]],
    n: int,
    inputs: Iterable[Any],
    *,
    return_exceptions: bool,
) -> list[Any]:
    """Run ``fn`` over ``inputs`` with at most ``n`` in flight, keeping input order."""
    if n < 1:
        raise ValueError(f"concurrency must be at least 1, got {n}")
    limit = asyncio.Semaphore(n)

    async def run(item: Any) -> Any:
        async with limit:
            return await fn(item)

    tasks = [asyncio.ensure_future(run(item)) for item in inputs]
    try:
        return list(await asyncio.gather(*tasks, return_exceptions=return_exceptions))
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()


class Op(ABC):
    """An asynchronous step of a pipeline that turns one input into one output.

    An op signals failure by raising. Combinators build larger ops out of
    smaller ones; the ``*_ok``/``*_err`` family treats a raised exception as
    the error branch.
    """

    @abstractmethod
    async def call(self, input: Any) -> Any:
        """Run the op on ``input`` and return its output."""

    async def batch_call(self, n: int, inputs: Iterable[Any]) -> list[Any]:
        """Run the op over ``inputs`` with at most ``n`` calls at once.

        Outputs keep the order of the inputs. A call that raises leaves its
        exception in its place in the returned list.
        """
        return await _buffered(self.call, n, inputs, return_exceptions=True)

    def map(self, f: Callable[[Any], Any]) -> Sequential:
        """Feed this op's output to the function ``f``."""
        return Sequential(self, Map(f))

    def then(self, f: Callable[[Any], Awaitable[Any]]) -> Sequential:
        """Feed this op's output to the asynchronous function ``f``."""
        return Sequential(self, Then(f))

    def chain(self, op: Op) -> Sequential:
        """Feed this op's output to another op."""
        return Sequential(self, op)

    def lookup(self, index: Any, n: int) -> Sequential:
        """Use this op's output as a query for the top ``n`` documents of ``index``."""
        from .agent_ops import Lookup

        return Sequential(self, Lookup(index, n))

    def prompt(self, prompt: Any) -> Sequential:
        """Send this op's output as a prompt to ``prompt`` and return the reply."""
        from .agent_ops import Prompt

        return Sequential(self, Prompt(prompt))

    async def try_call(self, input: Any) -> Any:
        """Run the op on ``input``; any failure propagates as an exception."""
        return await self.call(input)

    async def try_batch_call(self, n: int, inputs: Iterable[Any]) -> list[Any]:
        """Run the op over ``inputs`` with at most ``n`` calls at once.

        Outputs keep the order of the inputs. The first failure is raised and
        the calls still pending are cancelled.
        """
        return await _buffered(self.try_call, n, inputs, return_exceptions=False)

    def map_ok(self, f: Callable[[Any], Any]) -> Op:
        """Apply ``f`` to the output when the op succeeds."""
        from .try_op import MapOk

        return MapOk(self, Map(f))

    def map_err(self, f: Callable[[Exception], Exception]) -> Op:
        """Replace a raised exception with the one ``f`` returns for it."""
        from .try_op import MapErr

        return MapErr(self, Map(f))

    def and_then(self, f: Callable[[Any], Awaitable[Any]]) -> Op:
        """Await ``f`` on the output when the op succeeds."""
        from .try_op import AndThen

        return AndThen(self, Then(f))

    def or_else(self, f: Callable[[Exception], Awaitable[Any]]) -> Op:
        """Await ``f`` on the raised exception to recover from a failure."""
        from .try_op import OrElse

        return OrElse(self, Then(f))

    def chain_ok(self, op: Op) -> Op:
        """Feed the output to ``op`` when this op succeeds."""
        from .try_op import TrySequential

        return TrySequential(self, op)


@dataclass
class Sequential(Op):
    """Runs ``prev`` and feeds its output to ``op``."""

    prev: Op
    op: Op

    async def call(self, input: Any) -> Any:
        return await self.op.call(await self.prev.call(input))


@dataclass
class Map(Op):
    """Applies a plain function to the input."""

    f: Callable[[Any], Any]

    async def call(self, input: Any) -> Any:
        return self.f(input)


@dataclass
class Passthrough(Op):
    """Returns its input unchanged."""

    async def call(self, input: Any) -> Any:
        return input


@dataclass
class Then(Op):
    """Awaits an asynchronous function on the input."""

    f: Callable[[Any], Awaitable[Any]]

    async def call(self, input: Any) -> Any:
        return await self.f(input)


def map(f: Callable[[Any], Any]) -> Map:
    """Create an op that applies ``f`` to its input."""
    return Map(f)


def passthrough() -> Passthrough:
    """Create an op that returns its input unchanged."""
    return Passthrough()


def then(f: Callable[[Any], Awaitable[Any]]) -> Then:
    """Create an op that awaits ``f`` on its input."""
    return Then(f)