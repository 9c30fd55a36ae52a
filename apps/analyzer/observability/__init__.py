"""Observability module.

This module provides:
- Structured JSON logging with request/provider context
- Pipeline event helpers (analysis started/completed/failed, LLM calls)
"""

from .logger import StructuredLogger, clear_context, get_logger, set_context

__all__ = [
    "StructuredLogger",
    "get_logger",
    "set_context",
    "clear_context",
]
