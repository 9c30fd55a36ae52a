"""LLM reply parsing.

The reply is free text expected to contain one JSON object. The span from
the first "{" to the last "}" is decoded as-is: no code-block stripping,
no repairs. Shape problems are reported as warnings and never reject the
reply.
"""

import json
import logging
import re
from typing import Any

from jsonschema import Draft7Validator

from ..intentions.prompt import ANALYSIS_JSON_SCHEMA
from .exceptions import ResponseParseError
from .schemas import ValidationIssue, ValidationSeverity

logger = logging.getLogger(__name__)

# Greedy: first opening brace to last closing brace
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

_analysis_validator = Draft7Validator(ANALYSIS_JSON_SCHEMA)


class _NonStandardConstant(ValueError):
    """NaN, Infinity or -Infinity in the decoded text."""


def _reject_constant(name: str) -> float:
    raise _NonStandardConstant(f"{name} is not a valid JSON value")


def extract_analysis(text: str) -> dict[str, Any]:
    """Extract the analysis object from a raw LLM reply.

    Raises:
        ResponseParseError: No brace span found, or the span is not valid JSON
            (including the NaN/Infinity literals Python would otherwise accept)
    """
    match = JSON_OBJECT_PATTERN.search(text)
    if not match:
        raise ResponseParseError("No JSON found in response", raw_length=len(text))

    try:
        analysis = json.loads(match.group(0), parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ResponseParseError(
            f"Invalid JSON in response: {e.msg} (line {e.lineno}, column {e.colno})",
            raw_length=len(text),
        ) from e
    except _NonStandardConstant as e:
        raise ResponseParseError(f"Invalid JSON in response: {e}", raw_length=len(text)) from e

    return analysis


def check_analysis_shape(analysis: Any) -> list[ValidationIssue]:
    """Compare a parsed analysis with the requested shape.

    Returns WARNING issues only; the caller logs them.
    """
    issues: list[ValidationIssue] = []
    for error in _analysis_validator.iter_errors(analysis):
        path = "/".join(str(p) for p in error.absolute_path) or "root"
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="ANALYSIS_SHAPE",
                message=error.message,
                location=path,
            )
        )

    if issues:
        logger.warning(f"Analysis shape differs from the requested schema ({len(issues)} issues)")
    return issues
