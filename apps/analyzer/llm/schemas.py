"""LLM-related type definitions.

Common schemas for providers, responses and token usage.
"""

import os
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Provider(str, Enum):
    """Supported hosted LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"

    @property
    def display_name(self) -> str:
        """Vendor name used in user-facing messages."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Provider.ANTHROPIC: "Anthropic",
    Provider.OPENAI: "OpenAI",
    Provider.GEMINI: "Gemini",
}


class TokenUsage(BaseModel):
    """Token usage."""

    model_config = ConfigDict(frozen=True)

    input: int = Field(..., ge=0, description="Input tokens")
    output: int = Field(..., ge=0, description="Output tokens")

    @property
    def total(self) -> int:
        """Total tokens."""
        return self.input + self.output


class LLMResponse(BaseModel):
    """LLM response.

    Common response shape for every provider.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text")
    token_usage: TokenUsage = Field(..., description="Token usage")
    model: str = Field(..., description="Model id that produced the reply")
    provider: str = Field(..., description="Provider name")
    finish_reason: str | None = Field(
        default=None,
        description="Finish reason (stop, length, end_turn, ...)",
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the response was received",
    )
    latency_ms: float | None = Field(
        default=None,
        ge=0,
        description="Latency in milliseconds",
    )


class LLMRequestConfig(BaseModel):
    """Options for a single generate() call."""

    max_tokens: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_OUTPUT_TOKENS", "4096")),
        ge=1,
        le=128000,
        description="Maximum output tokens",
    )
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature; provider default when unset",
    )
