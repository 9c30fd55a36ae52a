"""Intention analysis data model.

QueryRow / ClassifiedQuery travel on the wire with the exported field
names. Intention mirrors the JSON keys the analysis prompt asks the LLM
for (French keys) through aliases.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QueryRow(BaseModel):
    """One Search Console query row. Immutable after parse."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., description="Query text")
    clicks: int = Field(..., ge=0, description="Clicks")
    impressions: int = Field(..., ge=0, description="Impressions")
    ctr: float = Field(..., ge=0.0, le=1.0, description="Click-through rate as a fraction")
    position: float = Field(..., ge=0.0, description="Average position")

    @field_validator("clicks", "impressions", mode="before")
    @classmethod
    def _truncate_float_counts(cls, value: Any) -> Any:
        if isinstance(value, float) and not isinstance(value, bool):
            return int(value)
        return value


class ClassifiedQuery(QueryRow):
    """A QueryRow with its assigned intention."""

    intention: str = Field(..., description="Assigned intention name")
    confidence: float = Field(..., ge=0.0, description="Additive score, not a probability")


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


class Intention(BaseModel):
    """A search intention discovered by the LLM.

    volume, mean_ctr and mean_position are what the LLM reported; they are
    never recomputed from the query rows.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., alias="nom")
    description: str
    volume: float
    examples: tuple[str, ...] = Field(..., alias="exemples")
    linguistic_signal: str = Field(..., alias="signal_linguistique")
    mean_ctr: float = Field(..., alias="ctr_moyen")
    mean_position: float = Field(..., alias="position_moyenne")

    @classmethod
    def from_raw(cls, raw: Any) -> "Intention | None":
        """Build leniently from one LLM intention object.

        Missing or ill-typed fields degrade to empty values. Returns None
        when the entry is not an object.
        """
        if not isinstance(raw, dict):
            return None
        examples = raw.get("exemples")
        if not isinstance(examples, list):
            examples = []
        return cls(
            nom=_as_str(raw.get("nom")),
            description=_as_str(raw.get("description")),
            volume=_as_float(raw.get("volume")),
            exemples=tuple(e for e in examples if isinstance(e, str)),
            signal_linguistique=_as_str(raw.get("signal_linguistique")),
            ctr_moyen=_as_float(raw.get("ctr_moyen")),
            position_moyenne=_as_float(raw.get("position_moyenne")),
        )


def intentions_from_analysis(analysis: Any) -> list[Intention]:
    """Extract the intention list from an opaque analysis dict.

    Anything that is not a list of objects yields an empty list.
    """
    if not isinstance(analysis, dict):
        return []
    raw_intentions = analysis.get("intentions")
    if not isinstance(raw_intentions, list):
        return []
    intentions = []
    for raw in raw_intentions:
        intention = Intention.from_raw(raw)
        if intention is not None:
            intentions.append(intention)
    return intentions


class LinguisticPatterns(BaseModel):
    """Recurring linguistic patterns reported by the LLM."""

    mots_recurrents: list[str] = Field(default_factory=list)
    structures_questions: list[str] = Field(default_factory=list)
    modificateurs_temporels: list[str] = Field(default_factory=list)
    termes_comparatifs: list[str] = Field(default_factory=list)


class Insights(BaseModel):
    """Narrative insights reported by the LLM."""

    biggest_opportunity: str
    biggest_friction: str
    quick_win: str


class AnalysisResult(BaseModel):
    """Shape of the analysis the prompt requests.

    Its JSON schema is ANALYSIS_JSON_SCHEMA, the reference for the
    non-fatal shape check. The service hands the parsed reply back as an
    opaque dict and never validates it against this model.
    """

    intentions: list[Intention]
    patterns_linguistiques: LinguisticPatterns
    insights: Insights
