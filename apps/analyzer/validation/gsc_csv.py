"""Search Console export ingestion.

Parses a query-performance CSV export into QueryRow objects. Header names
vary with the export language, so each field is looked up through a list
of aliases and the first non-empty cell wins.
"""

import csv
import io
import logging
import math
import re

from ..constants import (
    CLICKS_COLUMN_ALIASES,
    CTR_COLUMN_ALIASES,
    IMPRESSIONS_COLUMN_ALIASES,
    POSITION_COLUMN_ALIASES,
    QUERY_COLUMN_ALIASES,
)
from ..intentions.schemas import QueryRow
from .exceptions import CsvIngestionError
from .schemas import CsvIngestionResult, ValidationIssue, ValidationSeverity

logger = logging.getLogger(__name__)

SNIFF_DELIMITERS = ",;\t"
SNIFF_SAMPLE_SIZE = 4096

# Leading numeric prefix, e.g. "12 abc" -> "12", "3.5e2x" -> "3.5e2"
LEADING_NUMBER_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_leading_number(value: str | None) -> float | None:
    """Read the numeric prefix of a cell.

    Returns None when the cell does not start with a finite number.
    """
    if value is None:
        return None
    match = LEADING_NUMBER_PATTERN.match(value)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_ctr(raw: str | None) -> float:
    """Convert a CTR cell into a fraction.

    "22%" -> 0.22, "0,22%" -> 0.0022, "0.22" -> 0.22, "22" -> 0.22.
    Unreadable cells give 0.
    """
    text = raw if raw else "0"
    if "%" in text:
        value = parse_leading_number(text.replace("%", "", 1).replace(",", ".", 1))
        return value / 100 if value is not None else 0.0
    value = parse_leading_number(text.replace(",", ".", 1))
    if value is None:
        return 0.0
    return value / 100 if value > 1 else value


def _first_value(row: dict[str, str | None], aliases: tuple[str, ...]) -> str:
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return ""


def _decode(content: str | bytes, issues: list[ValidationIssue]) -> str:
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CsvIngestionError(
                f"Content is not valid UTF-8: {e}",
                code="CSV_INVALID_ENCODING",
            ) from e
    else:
        text = content

    if text.startswith("\ufeff"):
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="CSV_UTF8_BOM",
                message="Content has UTF-8 BOM (stripped)",
                location="line 1, column 1",
            )
        )
        text = text[1:]
    return text


def detect_delimiter(text: str) -> str:
    """Detect a comma, semicolon or tab delimiter; default to comma."""
    sample = text[:SNIFF_SAMPLE_SIZE]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=SNIFF_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def _row_from_record(record: dict[str, str | None], line: int, issues: list[ValidationIssue]) -> QueryRow | None:
    query = _first_value(record, QUERY_COLUMN_ALIASES).strip()
    clicks = parse_leading_number(_first_value(record, CLICKS_COLUMN_ALIASES) or "0") or 0.0
    impressions = parse_leading_number(_first_value(record, IMPRESSIONS_COLUMN_ALIASES) or "0") or 0.0
    ctr = parse_ctr(_first_value(record, CTR_COLUMN_ALIASES))
    position = parse_leading_number(_first_value(record, POSITION_COLUMN_ALIASES) or "0") or 0.0

    # Filter on the stored (truncated) counts
    clicks_count = int(clicks)
    impressions_count = int(impressions)

    if not query or impressions_count <= 0:
        return None

    if clicks_count != clicks or impressions_count != impressions:
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="CSV_VALUE_TRUNCATED",
                message="Fractional count truncated",
                location=f"line {line}",
            )
        )

    if ctr > 1 or ctr < 0 or clicks_count < 0 or position < 0:
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="CSV_VALUE_CLAMPED",
                message="Out-of-range value clamped",
                location=f"line {line}",
            )
        )
        ctr = min(max(ctr, 0.0), 1.0)
        clicks_count = max(clicks_count, 0)
        position = max(position, 0.0)

    return QueryRow(
        query=query,
        clicks=clicks_count,
        impressions=impressions_count,
        ctr=ctr,
        position=position,
    )


def parse_gsc_csv(content: str | bytes) -> CsvIngestionResult:
    """Parse a Search Console query export.

    Rows with empty query text or no impressions are dropped and counted.

    Raises:
        CsvIngestionError: On undecodable or empty content, or when no
            row survives filtering. The error carries the detected columns.
    """
    issues: list[ValidationIssue] = []
    text = _decode(content, issues)

    if not text.strip():
        raise CsvIngestionError("CSV content is empty", code="CSV_EMPTY", issues=issues)

    delimiter = detect_delimiter(text)
    reader = csv.DictReader(io.StringIO(text, newline=""), delimiter=delimiter)
    columns = [name for name in (reader.fieldnames or []) if name is not None]

    rows: list[QueryRow] = []
    skipped = 0
    for record in reader:
        # Blank lines are not data rows
        if not any((value or "").strip() for key, value in record.items() if key is not None):
            continue
        row = _row_from_record(record, reader.line_num, issues)
        if row is None:
            skipped += 1
            continue
        rows.append(row)

    if not rows:
        raise CsvIngestionError(
            f"Aucune donnée valide trouvée. Colonnes : {', '.join(columns)}",
            columns=columns,
            issues=issues,
        )

    logger.info(f"Parsed {len(rows)} queries ({skipped} skipped, delimiter={delimiter!r})")
    return CsvIngestionResult(
        rows=rows,
        columns=columns,
        skipped_rows=skipped,
        delimiter=delimiter,
        issues=issues,
    )
