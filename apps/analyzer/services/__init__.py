"""Service layer."""

from .analysis import ANALYSIS_FAILED_MESSAGE, AnalysisOutcome, run_analysis

__all__ = ["ANALYSIS_FAILED_MESSAGE", "AnalysisOutcome", "run_analysis"]
