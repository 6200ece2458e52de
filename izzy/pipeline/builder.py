"""Entry point for building pipelines out of ops."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from .agent_ops import Extract, Lookup, Prompt
from .op import Map, Op, Then


class ChainError(Exception):
    """Failure of an AI step of a pipeline: prompting an agent or looking up documents."""

    _MESSAGES = {
        "prompt": "Failed to prompt agent: {}",
        "lookup": "Failed to lookup documents: {}",
    }

    def __init__(self, kind: str, source: BaseException) -> None:
        if kind not in self._MESSAGES:
            raise ValueError(f"unknown chain error kind: {kind!r}")
        super().__init__(self._MESSAGES[kind].format(source))
        self.kind = kind
        self.source = source


@dataclass(frozen=True)
class PipelineBuilder:
    """Starts a pipeline; each method returns the first op of the pipeline.

    ``error_type`` records the kind of error the pipeline is meant to report.
    """

    error_type: Any = ChainError

    def map(self, f: Callable[[Any], Any]) -> Map:
        """Start the pipeline with the function ``f``."""
        return Map(f)

    def then(self, f: Callable[[Any], Awaitable[Any]]) -> Then:
        """Start the pipeline with the asynchronous function ``f``."""
        return Then(f)

    def chain(self, op: Op) -> Op:
        """Start the pipeline with an arbitrary op."""
        return op

    def lookup(self, index: Any, n: int) -> Lookup:
        """Start the pipeline with a lookup of the top ``n`` documents of ``index``."""
        return Lookup(index, n)

    def prompt(self, agent: Any) -> Prompt:
        """Start the pipeline by prompting ``agent`` with the input."""
        return Prompt(agent)

    def extract(self, extractor: Any) -> Extract:
        """Start the pipeline by extracting structured data from the input."""
        return Extract(extractor)


def new() -> PipelineBuilder:
    """Create a pipeline builder whose error type is :class:`ChainError`."""
    return PipelineBuilder(ChainError)


def with_error(error_type: Any) -> PipelineBuilder:
    """Create a pipeline builder with the given error type."""
    return PipelineBuilder(error_type)