"""Validation schemas for CSV ingestion and LLM response checks."""

from enum import Enum

from pydantic import BaseModel, Field

from ..intentions.schemas import QueryRow


class ValidationSeverity(str, Enum):
    """Severity level of validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BaseModel):
    """A single validation issue found during ingestion or parsing."""

    severity: ValidationSeverity
    code: str = Field(
        ...,
        description="Issue code, e.g., 'CSV_UTF8_BOM', 'ANALYSIS_SHAPE'",
    )
    message: str = Field(..., description="Human-readable message")
    location: str | None = Field(
        default=None,
        description="Location of the issue, e.g., 'line 5' or 'intentions/0/nom'",
    )


class CsvIngestionResult(BaseModel):
    """Outcome of parsing a Search Console export."""

    rows: list[QueryRow] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list, description="Detected header names")
    skipped_rows: int = Field(default=0, description="Rows dropped for empty query or zero impressions")
    delimiter: str = Field(default=",")
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def total_clicks(self) -> int:
        return sum(row.clicks for row in self.rows)

    @property
    def total_impressions(self) -> int:
        return sum(row.impressions for row in self.rows)

    def has_warnings(self) -> bool:
        """Check if there are any WARNING severity issues."""
        return any(issue.severity == ValidationSeverity.WARNING for issue in self.issues)
