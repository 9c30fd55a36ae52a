"""Intention analysis service.

Runs one analysis end to end for an AnalysisSession:
prompt -> LLM -> JSON extraction -> shape check -> classification.

Every stage failure is raised as PipelineError with the stage name and
error category. Nothing is retried.
"""

from dataclasses import dataclass, field
from typing import Any

from apps.analyzer.core.context import AnalysisSession
from apps.analyzer.core.errors import ErrorCategory, PipelineError
from apps.analyzer.intentions.classifier import classify_queries
from apps.analyzer.intentions.prompt import build_analysis_prompt
from apps.analyzer.intentions.schemas import ClassifiedQuery, intentions_from_analysis
from apps.analyzer.llm.base import LLMInterface, get_llm_client
from apps.analyzer.llm.exceptions import LLMError
from apps.analyzer.observability.logger import get_logger
from apps.analyzer.validation.exceptions import ResponseParseError
from apps.analyzer.validation.response_parser import check_analysis_shape, extract_analysis
from apps.analyzer.validation.schemas import ValidationIssue

logger = get_logger(__name__)

ANALYSIS_FAILED_MESSAGE = "Failed to analyze queries"


@dataclass
class AnalysisOutcome:
    """Result of one analysis run."""

    analysis: dict[str, Any]
    classified: list[ClassifiedQuery]
    issues: list[ValidationIssue] = field(default_factory=list)
    model: str | None = None


def _fail(session: AnalysisSession, stage: str, error: Exception, category: ErrorCategory) -> PipelineError:
    logger.analysis_failed(stage=stage, error=str(error), category=category.value, **session.to_log_dict())
    return PipelineError(ANALYSIS_FAILED_MESSAGE, details=str(error), stage=stage, category=category)


async def run_analysis(session: AnalysisSession, client: LLMInterface | None = None) -> AnalysisOutcome:
    """Discover intentions for the session's queries and classify every row.

    Args:
        session: Request-scoped analysis state
        client: LLM client; built from the session's provider and key when omitted

    Returns:
        AnalysisOutcome with the opaque analysis dict and classified rows

    Raises:
        PipelineError: Any downstream failure (LLM, parsing, classification)
    """
    logger.analysis_started(
        query_count=len(session.queries),
        request_id=session.request_id,
        provider=session.provider.value,
    )

    if client is None:
        client = get_llm_client(session.provider, api_key=session.api_key)

    prompt = build_analysis_prompt(session.queries, brand=session.brand, sector=session.sector)

    logger.llm_request(provider=session.provider.value, model=client.model, prompt_chars=len(prompt))
    try:
        response = await client.generate(messages=[{"role": "user", "content": prompt}])
    except LLMError as e:
        raise _fail(session, "llm", e, e.category) from e
    logger.llm_response(
        provider=session.provider.value,
        model=response.model,
        tokens_out=response.token_usage.output,
        latency_ms=response.latency_ms,
    )

    try:
        analysis = extract_analysis(response.content)
    except ResponseParseError as e:
        raise _fail(session, "parse", e, ErrorCategory.VALIDATION_FAIL) from e

    issues = check_analysis_shape(analysis)
    for issue in issues:
        logger.warning(
            f"Analysis shape: {issue.message}",
            extra_data={"location": issue.location, "code": issue.code},
        )

    intentions = intentions_from_analysis(analysis)
    classified = classify_queries(session.queries, intentions)

    classified_count = sum(1 for row in classified if row.confidence > 0)
    logger.analysis_completed(
        intention_count=len(intentions),
        classified_count=classified_count,
        duration_ms=session.elapsed_ms(),
    )

    return AnalysisOutcome(
        analysis=analysis,
        classified=classified,
        issues=issues,
        model=response.model,
    )
