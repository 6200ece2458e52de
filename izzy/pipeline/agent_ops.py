"""Pipeline ops backed by AI components: document lookup, prompting and extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from .op import Op


class _VectorStoreIndex(Protocol):
    async def top_n(self, query: str, n: int) -> list[tuple[float, str, Any]]: ...


class _PromptModel(Protocol):
    async def prompt(self, prompt: str) -> str: ...


class _Extractor(Protocol):
    async def extract(self, text: str) -> Any: ...


@dataclass
class Lookup(Op):
    """Looks up the ``n`` documents of ``index`` closest to the input query."""

    index: _VectorStoreIndex
    n: int

    async def call(self, input: Any) -> list[tuple[float, str, Any]]:
        return list(await self.index.top_n(str(input), self.n))


@dataclass
class Prompt(Op):
    """Prompts ``model`` with the input and returns its response."""

    model: _PromptModel

    async def call(self, input: Any) -> str:
        return await self.model.prompt(str(input))


@dataclass
class Extract(Op):
    """Extracts structured data from the input text with ``extractor``."""

    extractor: _Extractor

    async def call(self, input: Any) -> Any:
        return await self.extractor.extract(str(input))


def lookup(index: _VectorStoreIndex, n: int) -> Lookup:
    """Create an op returning the top ``n`` results of a semantic search on ``index``."""
    return Lookup(index, n)


def prompt(model: _PromptModel) -> Prompt:
    """Create an op that prompts ``model`` with its input."""
    return Prompt(model)


def extract(extractor: _Extractor) -> Extract:
    """Create an op that extracts structured data from its input."""
    return Extract(extractor)