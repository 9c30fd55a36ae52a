"""CSV ingestion endpoint.

POST /api/queries/parse takes a raw Search Console export as the request
body and returns the parsed rows.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request

from apps.analyzer.core.errors import RequestValidationFailure
from apps.analyzer.validation.exceptions import CsvIngestionError
from apps.analyzer.validation.gsc_csv import parse_gsc_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/queries", tags=["queries"])


@router.post("/parse")
async def parse_queries(request: Request) -> dict[str, Any]:
    """Parse an exported CSV (text/csv body)."""
    content = await request.body()

    try:
        result = parse_gsc_csv(content)
    except CsvIngestionError as e:
        logger.warning(f"CSV ingestion failed: {e}", extra={"code": e.code, "columns": e.columns})
        raise RequestValidationFailure(str(e), extra={"columns": e.columns}) from e

    return {
        "queries": [row.model_dump() for row in result.rows],
        "columns": result.columns,
        "skippedRows": result.skipped_rows,
        "totals": {
            "clicks": result.total_clicks,
            "impressions": result.total_impressions,
        },
        "issues": [issue.model_dump(mode="json") for issue in result.issues],
    }
