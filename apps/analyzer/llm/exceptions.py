"""LLM exception hierarchy."""

from typing import Any

from ..core.errors import ErrorCategory


class LLMError(Exception):
    """Base class for LLM API call errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        provider: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize.

        Args:
            message: Error message
            category: Error classification (RETRYABLE/NON_RETRYABLE/VALIDATION_FAIL)
            provider: Provider name (anthropic, openai, gemini)
            model: Model id in use
            details: Additional details for logs
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.provider = provider
        self.model = model
        self.details = details or {}

    def is_retryable(self) -> bool:
        """Whether a later identical request could succeed."""
        return self.category == ErrorCategory.RETRYABLE

    def to_dict(self) -> dict[str, Any]:
        """Dictionary view for structured logs."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "provider": self.provider,
            "model": self.model,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, category={self.category.value}, "
            f"provider={self.provider!r}, model={self.model!r})"
        )


class LLMConfigurationError(LLMError):
    """Client cannot be configured (bad key format, missing SDK)."""

    def __init__(self, message: str, provider: str, model: str | None = None) -> None:
        super().__init__(message, ErrorCategory.NON_RETRYABLE, provider, model)


class LLMAuthenticationError(LLMError):
    """Provider rejected the API key."""

    def __init__(self, message: str, provider: str, model: str | None = None) -> None:
        super().__init__(message, ErrorCategory.NON_RETRYABLE, provider, model)


class LLMInvalidRequestError(LLMError):
    """Provider rejected the request itself."""

    def __init__(
        self,
        message: str,
        provider: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCategory.NON_RETRYABLE, provider, model, details)


class LLMRateLimitError(LLMError):
    """Provider rate limit reached."""

    def __init__(self, message: str, provider: str, model: str | None = None) -> None:
        super().__init__(message, ErrorCategory.RETRYABLE, provider, model)


class LLMTimeoutError(LLMError):
    """Request did not complete in time."""

    def __init__(
        self,
        message: str,
        provider: str,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCategory.RETRYABLE,
            provider,
            model,
            {"timeout_seconds": timeout_seconds} if timeout_seconds is not None else None,
        )


class LLMServiceUnavailableError(LLMError):
    """Network failure or provider-side 5xx."""

    def __init__(self, message: str, provider: str, model: str | None = None) -> None:
        super().__init__(message, ErrorCategory.RETRYABLE, provider, model)


class LLMEmptyResponseError(LLMError):
    """Provider answered without usable text."""

    def __init__(self, message: str, provider: str, model: str | None = None) -> None:
        super().__init__(message, ErrorCategory.VALIDATION_FAIL, provider, model)
