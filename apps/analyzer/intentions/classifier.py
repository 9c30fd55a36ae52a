"""Deterministic query classifier.

Each query is scored against every discovered intention using its
linguistic signal and its example queries. The highest-scoring intention
wins; queries that score zero everywhere stay unclassified.

Scores are additive and uncapped, so intentions with many examples or
many signal fragments carry more weight. The score is reported as
`confidence` but is not a probability.
"""

import re
from collections.abc import Iterable, Sequence

from ..constants import EXAMPLE_WEIGHT, SIGNAL_WEIGHT, UNCLASSIFIED_LABEL
from .schemas import ClassifiedQuery, Intention, QueryRow

SIGNAL_SEPARATOR_PATTERN = re.compile(r"[,;]")


def signal_fragments(signal: str) -> list[str]:
    """Split a linguistic signal into lower-cased, non-empty fragments."""
    fragments = (fragment.strip() for fragment in SIGNAL_SEPARATOR_PATTERN.split(signal.lower()))
    # An empty fragment would match every query
    return [fragment for fragment in fragments if fragment]


def signal_score(query_lower: str, signal: str) -> float:
    """0.4 per signal fragment found in the query."""
    return sum(SIGNAL_WEIGHT for fragment in signal_fragments(signal) if fragment in query_lower)


def example_score(query_lower: str, examples: Iterable[str]) -> float:
    """Token overlap with every example, summed.

    Tokens come from splitting on a single space. Duplicate example tokens
    each count when present in the query.
    """
    query_tokens = query_lower.split(" ")
    query_token_set = set(query_tokens)
    score = 0.0
    for example in examples:
        example_tokens = example.lower().split(" ")
        shared = sum(1 for token in example_tokens if token in query_token_set)
        score += shared / max(len(example_tokens), len(query_tokens)) * EXAMPLE_WEIGHT
    return score


def score_query(query_text: str, intention: Intention) -> float:
    """Score one query against one intention."""
    query_lower = query_text.lower()
    return signal_score(query_lower, intention.linguistic_signal) + example_score(query_lower, intention.examples)


def best_intention(query_text: str, intentions: Sequence[Intention]) -> tuple[str, float]:
    """Pick the best intention for a query.

    Strictly greater wins, so the first intention keeps a tie.

    Returns:
        (intention name, score); (UNCLASSIFIED_LABEL, 0) when nothing scores
    """
    best_name = UNCLASSIFIED_LABEL
    best_score = 0.0
    for intention in intentions:
        score = score_query(query_text, intention)
        if score > best_score:
            best_name = intention.name
            best_score = score
    return best_name, best_score


def classify_queries(queries: Sequence[QueryRow], intentions: Sequence[Intention]) -> list[ClassifiedQuery]:
    """Assign every query to its best-matching intention.

    Input order is preserved and the intention list is not modified.
    """
    classified = []
    for row in queries:
        name, score = best_intention(row.query, intentions)
        classified.append(ClassifiedQuery(**row.model_dump(), intention=name, confidence=score))
    return classified
