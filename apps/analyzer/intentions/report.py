"""Read-side aggregations over classified queries.

Position x Intention CTR matrix, per-intention details with quick wins,
dataset totals and cell drill-down. Nothing here changes the classified
rows or the analysis.
"""

import re
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..constants import (
    POSITION_GROUPS,
    QUICK_WIN_MAX_POSITION,
    QUICK_WIN_MIN_IMPRESSIONS,
    QUICK_WIN_MIN_POSITION,
    TOP_QUERIES_PER_INTENTION,
)
from .schemas import ClassifiedQuery, QueryRow, intentions_from_analysis

SENTENCE_SPLIT_PATTERN = re.compile(r"\.\s+")


class ReportModel(BaseModel):
    """Base for report payloads (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MatrixCell(ReportModel):
    ctr: float = 0.0
    count: int = 0
    queries: list[ClassifiedQuery] = Field(default_factory=list)


class MatrixRow(ReportModel):
    position: str
    cells: dict[str, MatrixCell] = Field(default_factory=dict)


class IntentionDetails(ReportModel):
    name: str
    total_clicks: int = 0
    total_impressions: int = 0
    top_queries: list[ClassifiedQuery] = Field(default_factory=list)
    position_distribution: dict[str, int] = Field(default_factory=dict)
    quick_wins: list[ClassifiedQuery] = Field(default_factory=list)


class DatasetSummary(ReportModel):
    query_count: int = 0
    total_clicks: int = 0
    total_impressions: int = 0
    classified_count: int = 0
    unclassified_count: int = 0


class AnalysisReport(ReportModel):
    summary: DatasetSummary
    insights: dict[str, list[str]] = Field(default_factory=dict)
    matrix: list[MatrixRow] = Field(default_factory=list)
    intentions: list[IntentionDetails] = Field(default_factory=list)


def position_group(position: float) -> str:
    """Return the group label for an average position.

    Groups are contiguous so every position lands in exactly one group.
    """
    for label, upper in POSITION_GROUPS:
        if upper is None or position <= upper:
            return label
    return POSITION_GROUPS[-1][0]


def cell_queries(classified: Sequence[ClassifiedQuery], intention: str, group: str) -> list[ClassifiedQuery]:
    """Rows of one matrix cell, in input order."""
    return [row for row in classified if row.intention == intention and position_group(row.position) == group]


def _mean_ctr(rows: Sequence[QueryRow]) -> float:
    if not rows:
        return 0.0
    return sum(row.ctr for row in rows) / len(rows)


def build_matrix(classified: Sequence[ClassifiedQuery], intention_names: Sequence[str]) -> list[MatrixRow]:
    """Build the Position x Intention matrix.

    One row per position group, one cell per intention with the mean CTR,
    the row count and the rows themselves. Empty cells report 0.
    """
    matrix = []
    for label, _ in POSITION_GROUPS:
        cells = {}
        for name in intention_names:
            rows = cell_queries(classified, name, label)
            cells[name] = MatrixCell(ctr=_mean_ctr(rows), count=len(rows), queries=rows)
        matrix.append(MatrixRow(position=label, cells=cells))
    return matrix


def is_quick_win(row: QueryRow) -> bool:
    """Page-one-adjacent query with meaningful visibility."""
    return (
        QUICK_WIN_MIN_POSITION <= row.position <= QUICK_WIN_MAX_POSITION
        and row.impressions > QUICK_WIN_MIN_IMPRESSIONS
    )


def intention_details(classified: Sequence[ClassifiedQuery], name: str) -> IntentionDetails:
    """Totals, top queries, position distribution and quick wins for one intention.

    Top queries are sorted on a copy; the input order is left alone.
    """
    rows = [row for row in classified if row.intention == name]

    distribution = {label: 0 for label, _ in POSITION_GROUPS}
    for row in rows:
        distribution[position_group(row.position)] += 1

    top = sorted(rows, key=lambda row: row.clicks, reverse=True)[:TOP_QUERIES_PER_INTENTION]

    return IntentionDetails(
        name=name,
        total_clicks=sum(row.clicks for row in rows),
        total_impressions=sum(row.impressions for row in rows),
        top_queries=top,
        position_distribution=distribution,
        quick_wins=[row for row in rows if is_quick_win(row)],
    )


def dataset_summary(rows: Sequence[QueryRow]) -> DatasetSummary:
    """Query count and totals; classification counts when rows are classified."""
    classified_count = sum(1 for row in rows if isinstance(row, ClassifiedQuery) and row.confidence > 0)
    unclassified_count = sum(1 for row in rows if isinstance(row, ClassifiedQuery) and row.confidence <= 0)
    return DatasetSummary(
        query_count=len(rows),
        total_clicks=sum(row.clicks for row in rows),
        total_impressions=sum(row.impressions for row in rows),
        classified_count=classified_count,
        unclassified_count=unclassified_count,
    )


def insight_sentences(text: str) -> list[str]:
    """Split an insight paragraph into sentences for display."""
    return [sentence.strip() for sentence in SENTENCE_SPLIT_PATTERN.split(text) if sentence.strip()]


def build_report(analysis: Any, classified: Sequence[ClassifiedQuery]) -> AnalysisReport:
    """Bundle summary, insights, matrix and per-intention details.

    `analysis` is the opaque dict returned by the analyze endpoint; a
    malformed one yields an empty matrix and no details.
    """
    names = [intention.name for intention in intentions_from_analysis(analysis)]

    insights: dict[str, list[str]] = {}
    raw_insights = analysis.get("insights") if isinstance(analysis, dict) else None
    if isinstance(raw_insights, dict):
        for key, value in raw_insights.items():
            if isinstance(value, str):
                insights[key] = insight_sentences(value)

    return AnalysisReport(
        summary=dataset_summary(classified),
        insights=insights,
        matrix=build_matrix(classified, names),
        intentions=[intention_details(classified, name) for name in names],
    )
