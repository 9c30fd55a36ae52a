"""Validation-related exceptions."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schemas import ValidationIssue


class CsvIngestionError(Exception):
    """Raised when a Search Console export yields no usable rows.

    Carries the detected column headers so callers can show which
    columns were found.
    """

    def __init__(
        self,
        message: str,
        columns: list[str] | None = None,
        code: str = "CSV_NO_VALID_ROWS",
        issues: list["ValidationIssue"] | None = None,
    ) -> None:
        super().__init__(message)
        self.columns = columns or []
        self.code = code
        self.issues = issues or []


class ResponseParseError(Exception):
    """Raised when no analysis object can be read from an LLM reply.

    Fatal for the request: no retry, no partial salvage.
    """

    def __init__(self, message: str, raw_length: int = 0) -> None:
        super().__init__(message)
        self.raw_length = raw_length
