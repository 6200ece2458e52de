"""Ops, combinators, parallel execution and builders for async pipelines."""

__all__ = ["agent_ops", "builder", "op", "parallel", "try_op"]