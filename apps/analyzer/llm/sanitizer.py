"""Prompt input sanitizer.

Brand and sector strings come straight from the user and are embedded in
the analysis prompt:
- control characters are removed
- prompt-injection markers are detected and logged, never rejected
- length is capped
"""

import logging
import re

logger = logging.getLogger(__name__)

CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

INJECTION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"ignore\s+(all\s+)?previous\s+instructions?", re.I), "ignore_previous"),
    (re.compile(r"disregard\s+(all\s+)?above", re.I), "disregard_above"),
    (re.compile(r"ignore[rz]?\s+(toutes\s+)?les\s+instructions", re.I), "ignore_previous_fr"),
    (re.compile(r"system\s*:\s*", re.I), "system_role_marker"),
    (re.compile(r"assistant\s*:\s*", re.I), "assistant_role_marker"),
    (re.compile(r"\[INST\]|\[/INST\]", re.I), "instruction_marker"),
    (re.compile(r"<\|im_start\|>|<\|im_end\|>", re.I), "chatml_marker"),
    (re.compile(r"you\s+are\s+now\s+", re.I), "role_override"),
]

# Brand / sector are short labels
DEFAULT_MAX_LENGTH = 200


def sanitize_user_input(
    text: str | None,
    max_length: int = DEFAULT_MAX_LENGTH,
    warn_on_injection: bool = True,
) -> str:
    """Sanitize a user-provided string before embedding it in a prompt.

    Args:
        text: Text to sanitize
        max_length: Maximum characters (the rest is cut)
        warn_on_injection: Log a warning when an injection pattern is found

    Returns:
        Sanitized text (empty string for None)
    """
    if not text:
        return ""

    result = CONTROL_CHARS_PATTERN.sub("", text).strip()

    if len(result) > max_length:
        logger.warning(f"User input truncated: {len(result)} -> {max_length} chars")
        result = result[:max_length]

    if warn_on_injection:
        detected = [name for pattern, name in INJECTION_PATTERNS if pattern.search(result)]
        if detected:
            logger.warning(
                "Potential prompt injection detected",
                extra={
                    "patterns": detected,
                    "input_length": len(result),
                    "input_preview": result[:100],
                },
            )

    return result
