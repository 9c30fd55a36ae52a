"""Validation package: CSV ingestion and LLM reply parsing."""

from .exceptions import CsvIngestionError, ResponseParseError
from .gsc_csv import detect_delimiter, parse_ctr, parse_gsc_csv, parse_leading_number
from .response_parser import check_analysis_shape, extract_analysis
from .schemas import CsvIngestionResult, ValidationIssue, ValidationSeverity

__all__ = [
    # Exceptions
    "CsvIngestionError",
    "ResponseParseError",
    # Schemas
    "CsvIngestionResult",
    "ValidationIssue",
    "ValidationSeverity",
    # CSV ingestion
    "detect_delimiter",
    "parse_ctr",
    "parse_gsc_csv",
    "parse_leading_number",
    # Response parsing
    "check_analysis_shape",
    "extract_analysis",
]
