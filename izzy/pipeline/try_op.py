"""Combinators for ops whose failure is the error branch.

An op fails by raising an exception. These combinators route the success
value or the raised exception to a second op.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .op import Op


@dataclass
class MapOk(Op):
    """Runs ``prev`` and, when it succeeds, feeds its output to ``op``."""

    prev: Op
    op: Op

    async def call(self, input: Any) -> Any:
        output = await self.prev.try_call(input)
        return await self.op.call(output)


@dataclass
class MapErr(Op):
    """Runs ``prev`` and, when it fails, raises the exception ``op`` makes of the error.

    ``op`` must return an exception instance; anything else raises ``TypeError``.
    """

    prev: Op
    op: Op

    async def call(self, input: Any) -> Any:
        try:
            return await self.prev.try_call(input)
        except Exception as err:
            mapped = await self.op.call(err)
            if mapped is err:
                raise
            if not isinstance(mapped, BaseException):
                raise TypeError(
                    f"error mapping must return an exception, got {type(mapped).__name__}"
                ) from err
            raise mapped from err


@dataclass
class AndThen(Op):
    """Runs ``prev`` and, when it succeeds, runs the fallible ``op`` on its output."""

    prev: Op
    op: Op

    async def call(self, input: Any) -> Any:
        output = await self.prev.try_call(input)
        return await self.op.try_call(output)


@dataclass
class OrElse(Op):
    """Runs ``prev`` and, when it fails, runs ``op`` on the raised exception.

    The output of ``op`` becomes the result; if ``op`` raises, that error propagates.
    """

    prev: Op
    op: Op

    async def call(self, input: Any) -> Any:
        try:
            return await self.prev.try_call(input)
        except Exception as err:
            return await self.op.try_call(err)


@dataclass
class TrySequential(Op):
    """Runs ``prev`` and, when it succeeds, feeds its output to the op ``op``."""

    prev: Op
    op: Op

    async def call(self, input: Any) -> Any:
        output = await self.prev.try_call(input)
        return await self.op.call(output)