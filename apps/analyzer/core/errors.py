"""Error classification for the analysis pipeline.

ErrorCategory describes the nature of a failure:
- RETRYABLE: Temporary failures, the same request may succeed later
- NON_RETRYABLE: Permanent failures, no retry will help
- VALIDATION_FAIL: Output validation failed (LLM reply unusable)

The service never retries automatically; the category is reported in logs
and error details so the caller can decide.
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Classification of pipeline errors."""

    RETRYABLE = "retryable"
    NON_RETRYABLE = "non_retryable"
    VALIDATION_FAIL = "validation_fail"


class RequestValidationFailure(Exception):
    """Request rejected before any external call (HTTP 400)."""

    def __init__(self, error: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.extra = extra or {}

    def to_body(self) -> dict[str, Any]:
        """Response body for the client."""
        return {"error": self.error, **self.extra}


class PipelineError(Exception):
    """Downstream failure after validation succeeded (HTTP 500)."""

    def __init__(
        self,
        message: str,
        details: str,
        stage: str,
        category: ErrorCategory = ErrorCategory.NON_RETRYABLE,
    ) -> None:
        super().__init__(f"{message}: {details}")
        self.message = message
        self.details = details
        self.stage = stage
        self.category = category

    def to_body(self) -> dict[str, Any]:
        """Response body for the client."""
        return {"error": self.message, "details": self.details}
