"""Structured logging for analysis observability.

Provides context-aware logging with automatic request/provider tagging.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any

# Context variables for automatic tagging
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_provider: ContextVar[str | None] = ContextVar("provider", default=None)


def set_context(
    request_id: str | None = None,
    provider: str | None = None,
) -> None:
    """Set logging context variables."""
    if request_id is not None:
        _request_id.set(request_id)
    if provider is not None:
        _provider.set(provider)


def clear_context() -> None:
    """Clear all logging context variables."""
    _request_id.set(None)
    _provider.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id := _request_id.get():
            log_data["request_id"] = request_id
        if provider := _provider.get():
            log_data["provider"] = provider

        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class StructuredLogger:
    """Logger with structured output and context awareness."""

    def __init__(self, name: str, level: int = logging.INFO):
        """Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter())
            self._logger.addHandler(handler)
            self._logger.propagate = False

    def _log(
        self,
        level: int,
        msg: str,
        *args: Any,
        extra_data: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Log with optional extra data."""
        extra = kwargs.pop("extra", {})
        if extra_data:
            extra["extra_data"] = extra_data
        self._logger.log(level, msg, *args, extra=extra, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, *args, exc_info=True, **kwargs)

    def analysis_started(self, query_count: int, **extra: Any) -> None:
        """Log analysis started event."""
        self.info(
            f"Analysis started ({query_count} queries)",
            extra_data={"query_count": query_count, **extra},
        )

    def analysis_completed(
        self,
        intention_count: int,
        classified_count: int,
        duration_ms: int | None = None,
        **extra: Any,
    ) -> None:
        """Log analysis completed event."""
        data = {
            "intention_count": intention_count,
            "classified_count": classified_count,
            **extra,
        }
        if duration_ms is not None:
            data["duration_ms"] = duration_ms
        self.info("Analysis completed", extra_data=data)

    def analysis_failed(
        self,
        stage: str,
        error: str,
        category: str,
        **extra: Any,
    ) -> None:
        """Log analysis failed event."""
        self.error(
            f"Analysis failed at {stage}: {error}",
            extra_data={
                "stage": stage,
                "error": error,
                "category": category,
                **extra,
            },
        )

    def llm_request(
        self,
        provider: str,
        model: str,
        prompt_chars: int | None = None,
        **extra: Any,
    ) -> None:
        """Log LLM request."""
        self.info(
            f"LLM request to {provider}/{model}",
            extra_data={
                "provider": provider,
                "model": model,
                "prompt_chars": prompt_chars,
                **extra,
            },
        )

    def llm_response(
        self,
        provider: str,
        model: str,
        tokens_out: int | None = None,
        latency_ms: float | None = None,
        **extra: Any,
    ) -> None:
        """Log LLM response."""
        self.info(
            f"LLM response from {provider}/{model}",
            extra_data={
                "provider": provider,
                "model": model,
                "tokens_out": tokens_out,
                "latency_ms": latency_ms,
                **extra,
            },
        )


# Global logger cache
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name

    Returns:
        StructuredLogger instance
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]
