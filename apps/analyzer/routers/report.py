"""Report endpoint.

POST /api/report aggregates an analysis and its classified queries into
the Position x Intention matrix, per-intention details and totals.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import TypeAdapter, ValidationError

from apps.analyzer.core.errors import RequestValidationFailure
from apps.analyzer.intentions.report import build_report
from apps.analyzer.intentions.schemas import ClassifiedQuery
from apps.analyzer.routers.analyze import read_json_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["report"])

_classified_rows = TypeAdapter(list[ClassifiedQuery])


@router.post("/report")
async def build_analysis_report(request: Request) -> dict[str, Any]:
    """Aggregate a finished analysis."""
    body = await read_json_body(request)
    if not isinstance(body, dict) or not isinstance(body.get("analysis"), dict):
        raise RequestValidationFailure("Invalid analysis format")

    try:
        classified = _classified_rows.validate_python(body.get("classifiedQueries"))
    except ValidationError as e:
        raise RequestValidationFailure("Invalid classifiedQueries format") from e

    report = build_report(body["analysis"], classified)
    logger.info(f"Report built for {len(classified)} classified queries")
    return report.model_dump(by_alias=True)
