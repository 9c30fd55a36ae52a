"""Analyzer constants

Centralized constants shared by ingestion, prompt building, classification
and reporting.
"""

# Rows serialized into the analysis prompt
MAX_PROMPT_QUERIES = 100

# Classifier weights (additive, uncapped)
SIGNAL_WEIGHT = 0.4
EXAMPLE_WEIGHT = 0.6

# Label for queries no intention scores above zero
UNCLASSIFIED_LABEL = "Non classifiée"

# Position groups for the Position x Intention matrix: (label, upper bound inclusive)
POSITION_GROUPS: tuple[tuple[str, float | None], ...] = (
    ("P1-3", 3.0),
    ("P4-7", 7.0),
    ("P8-10", 10.0),
    ("P11+", None),
)

# Quick win: position 4-10 with more impressions than this
QUICK_WIN_MIN_POSITION = 4.0
QUICK_WIN_MAX_POSITION = 10.0
QUICK_WIN_MIN_IMPRESSIONS = 100

# Top queries listed per intention
TOP_QUERIES_PER_INTENTION = 5

# Accepted CSV header aliases, tried in order
QUERY_COLUMN_ALIASES: tuple[str, ...] = (
    "Requêtes les plus fréquentes",
    "Requêtes",
    "Top queries",
    "Requête",
    "Query",
    "query",
)
CLICKS_COLUMN_ALIASES: tuple[str, ...] = ("Clicks", "Clics", "clicks")
IMPRESSIONS_COLUMN_ALIASES: tuple[str, ...] = ("Impressions", "impressions")
CTR_COLUMN_ALIASES: tuple[str, ...] = ("CTR", "ctr")
POSITION_COLUMN_ALIASES: tuple[str, ...] = ("Position", "position")
