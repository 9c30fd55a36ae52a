"""Intention discovery: data model, prompt, classifier and report."""

from .classifier import best_intention, classify_queries, score_query, signal_fragments
from .prompt import ANALYSIS_JSON_SCHEMA, build_analysis_prompt
from .report import (
    AnalysisReport,
    DatasetSummary,
    IntentionDetails,
    MatrixCell,
    MatrixRow,
    build_matrix,
    build_report,
    cell_queries,
    dataset_summary,
    intention_details,
    is_quick_win,
    position_group,
)
from .schemas import (
    AnalysisResult,
    ClassifiedQuery,
    Insights,
    Intention,
    LinguisticPatterns,
    QueryRow,
    intentions_from_analysis,
)

__all__ = [
    # Schemas
    "AnalysisResult",
    "ClassifiedQuery",
    "Insights",
    "Intention",
    "LinguisticPatterns",
    "QueryRow",
    "intentions_from_analysis",
    # Prompt
    "ANALYSIS_JSON_SCHEMA",
    "build_analysis_prompt",
    # Classifier
    "best_intention",
    "classify_queries",
    "score_query",
    "signal_fragments",
    # Report
    "AnalysisReport",
    "DatasetSummary",
    "IntentionDetails",
    "MatrixCell",
    "MatrixRow",
    "build_matrix",
    "build_report",
    "cell_queries",
    "dataset_summary",
    "intention_details",
    "is_quick_win",
    "position_group",
]
