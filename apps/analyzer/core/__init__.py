"""Core contract module for the intention analyzer.

This module provides:
- AnalysisSession: Request-scoped state passed through the pipeline
- Error classification: ErrorCategory and RequestValidationFailure
"""

from .context import AnalysisSession
from .errors import ErrorCategory, PipelineError, RequestValidationFailure

__all__ = [
    "AnalysisSession",
    "ErrorCategory",
    "PipelineError",
    "RequestValidationFailure",
]
