"""API routers."""

from . import analyze, health, queries, report

__all__ = ["analyze", "health", "queries", "report"]
