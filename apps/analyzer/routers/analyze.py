"""Intention analysis endpoint.

POST /api/analyze runs one analysis with the caller's own provider key.
Request checks run in a fixed order and every rejection happens before
any network call.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import TypeAdapter, ValidationError

from apps.analyzer.core.context import AnalysisSession
from apps.analyzer.core.errors import PipelineError, RequestValidationFailure
from apps.analyzer.intentions.schemas import QueryRow
from apps.analyzer.llm.base import validate_api_key_format
from apps.analyzer.llm.exceptions import LLMConfigurationError
from apps.analyzer.llm.schemas import Provider
from apps.analyzer.observability.logger import set_context
from apps.analyzer.services.analysis import ANALYSIS_FAILED_MESSAGE, run_analysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])

_query_rows = TypeAdapter(list[QueryRow])


async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON.

    Raises:
        RequestValidationFailure: Body is not valid JSON
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationFailure("Invalid request body") from e


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def build_session(body: Any) -> AnalysisSession:
    """Validate an analyze request body and build its session.

    Checks, in order: queries, provider, API key presence, API key format.

    Raises:
        RequestValidationFailure: First failed check
    """
    if not isinstance(body, dict):
        body = {}

    raw_queries = body.get("queries")
    if not isinstance(raw_queries, list):
        raise RequestValidationFailure("Invalid queries format")
    try:
        queries = _query_rows.validate_python(raw_queries)
    except ValidationError as e:
        raise RequestValidationFailure("Invalid queries format") from e

    raw_provider = body.get("provider")
    if not isinstance(raw_provider, str) or raw_provider not in {p.value for p in Provider}:
        raise RequestValidationFailure("Invalid or missing provider")
    provider = Provider(raw_provider)

    api_key = body.get("apiKey")
    if not api_key or not isinstance(api_key, str):
        raise RequestValidationFailure("Invalid or missing API key")

    try:
        validate_api_key_format(provider, api_key)
    except LLMConfigurationError as e:
        raise RequestValidationFailure(e.message) from e

    return AnalysisSession(
        provider=provider,
        api_key=api_key,
        queries=queries,
        brand=_optional_text(body.get("brand")),
        sector=_optional_text(body.get("sector")),
    )


@router.post("/analyze")
async def analyze_queries(request: Request) -> dict[str, Any]:
    """Discover search intentions and classify every query.

    Returns:
        {"analysis": <LLM analysis object>, "classifiedQueries": [...]}
    """
    body = await read_json_body(request)
    session = build_session(body)
    set_context(provider=session.provider.value)

    logger.info(
        "Analyze request accepted",
        extra={"session": session.to_log_dict()},
    )

    try:
        outcome = await run_analysis(session)
    except PipelineError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error analyzing queries: {e}", exc_info=True)
        raise PipelineError(ANALYSIS_FAILED_MESSAGE, details=str(e) or type(e).__name__, stage="unknown") from e

    return {
        "analysis": outcome.analysis,
        "classifiedQueries": [row.model_dump() for row in outcome.classified],
    }
