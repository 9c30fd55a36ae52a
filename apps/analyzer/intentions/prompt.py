"""Analysis prompt construction.

The prompt is written in French and asks the model for a single JSON object
describing the intentions it discovers in the query sample.
"""

from collections.abc import Sequence
from typing import Any

from ..constants import MAX_PROMPT_QUERIES
from ..llm.sanitizer import sanitize_user_input
from .schemas import AnalysisResult, QueryRow

DEFAULT_BRAND = "non spécifiée"
DEFAULT_SECTOR = "non spécifié"

# Shape requested from the model, checked after parsing (warnings only)
ANALYSIS_JSON_SCHEMA: dict[str, Any] = AnalysisResult.model_json_schema(by_alias=True)

ANALYSIS_PROMPT_TEMPLATE = """Tu es un consultant SEO senior spécialisé dans l'analyse d'intentions de recherche.

CONTEXTE
- Marque : {brand}
- Secteur : {sector}
- Dataset : {dataset_size} requêtes issues de Google Search Console

MISSION
Analyse ces requêtes SANS utiliser de catégories prédéfinies. Identifie les PATTERNS RÉELS et les intentions CONCRÈTES des utilisateurs.

DONNÉES
{data_lines}

ANALYSE REQUISE

1. **INTENTIONS DÉCOUVERTES** (3-6 intentions)
   Pour chaque intention identifiée :
   - nom : Nom court et descriptif (max 4 mots)
   - description : Ce que cherche VRAIMENT l'utilisateur
   - volume : Nombre de requêtes dans ce pattern
   - exemples : 3-5 requêtes typiques
   - signal_linguistique : Pattern de mots récurrent (ex: "comment", "prix", "vs", "2024")
   - ctr_moyen : CTR moyen de ces requêtes
   - position_moyenne : Position moyenne

2. **PATTERNS LINGUISTIQUES**
   - Mots récurrents significatifs
   - Structures de questions
   - Modificateurs temporels (2024, 2025)
   - Termes comparatifs (vs, ou, meilleur)

3. **INSIGHTS STRATÉGIQUES** (DÉTAILLÉS ET ACTIONNABLES)
   - biggest_opportunity : Décris EN DÉTAIL (2-3 phrases minimum) l'opportunité principale avec des EXEMPLES CONCRETS de requêtes et des CHIFFRES précis (volume, position, CTR). Explique POURQUOI c'est une opportunité et COMMENT la saisir.
   - biggest_friction : Décris EN DÉTAIL (2-3 phrases minimum) la friction principale avec des EXEMPLES CONCRETS de requêtes et des CHIFFRES précis. Explique POURQUOI c'est une friction et COMMENT la résoudre.
   - quick_win : Décris EN DÉTAIL (2-3 phrases minimum) une action rapide et concrète à mettre en place IMMÉDIATEMENT, avec des EXEMPLES précis de requêtes concernées et l'impact attendu.

CONTRAINTES IMPORTANTES :
- NE JAMAIS recommander de capitaliser sur des fautes d'orthographe (ex: "look academy" vs "lock academy") - c'est une pratique black-hat interdite
- NE JAMAIS suggérer de créer des URLs spécifiques (ex: "/escape-game-paris-2-joueurs") sans savoir si elles existent déjà - reste sur des recommandations stratégiques de haut niveau
- Privilégier les recommandations WHITE-HAT : optimisation de contenu existant, amélioration de la pertinence, structure de l'information
- Les insights doivent être RICHES, DÉTAILLÉS et contenir des DONNÉES CHIFFRÉES issues de l'analyse (exemples de requêtes, volumes, positions, CTR)

FORMAT JSON STRICT :
{{
  "intentions": [
    {{
      "nom": "string",
      "description": "string",
      "volume": number,
      "exemples": ["string"],
      "signal_linguistique": "string",
      "ctr_moyen": number,
      "position_moyenne": number
    }}
  ],
  "patterns_linguistiques": {{
    "mots_recurrents": ["string"],
    "structures_questions": ["string"],
    "modificateurs_temporels": ["string"],
    "termes_comparatifs": ["string"]
  }},
  "insights": {{
    "biggest_opportunity": "string (2-3 phrases détaillées avec exemples et chiffres)",
    "biggest_friction": "string (2-3 phrases détaillées avec exemples et chiffres)",
    "quick_win": "string (2-3 phrases détaillées avec action concrète)"
  }}
}}"""


def format_query_line(row: QueryRow) -> str:
    """Render one row for the DONNÉES block."""
    return f'"{row.query}" | Pos: {row.position:.1f} | CTR: {row.ctr * 100:.1f}% | Clics: {row.clicks}'


def build_analysis_prompt(
    queries: Sequence[QueryRow],
    brand: str | None = None,
    sector: str | None = None,
) -> str:
    """Build the intention discovery prompt.

    The dataset size reports every row received, while only the first
    MAX_PROMPT_QUERIES rows are listed.

    Args:
        queries: Parsed query rows
        brand: Optional brand name (user input)
        sector: Optional business sector (user input)

    Returns:
        Prompt text for a single user message
    """
    brand_text = sanitize_user_input(brand) if brand else ""
    sector_text = sanitize_user_input(sector) if sector else ""

    data_lines = "\n".join(format_query_line(row) for row in queries[:MAX_PROMPT_QUERIES])

    return ANALYSIS_PROMPT_TEMPLATE.format(
        brand=brand_text or DEFAULT_BRAND,
        sector=sector_text or DEFAULT_SECTOR,
        dataset_size=len(queries),
        data_lines=data_lines,
    )
