"""Composable async pipelines for AI workflows, and a never-empty list type."""

__version__ = "0.1.0"