"""Pytest configuration and fixtures for tests."""

import json
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

ANTHROPIC_TEST_KEY = "sk-ant-test-key"
OPENAI_TEST_KEY = "sk-test-key"
GEMINI_TEST_KEY = "AIza-test-key"


@pytest.fixture
def sample_rows():
    """Three parsed query rows."""
    from apps.analyzer.intentions.schemas import QueryRow

    return [
        QueryRow(query="escape game paris", clicks=120, impressions=2400, ctr=0.05, position=2.4),
        QueryRow(query="prix escape game", clicks=30, impressions=900, ctr=0.0333, position=6.2),
        QueryRow(query="escape game vs laser game", clicks=4, impressions=310, ctr=0.0129, position=12.5),
    ]


@pytest.fixture
def sample_analysis() -> dict:
    """Analysis object as returned by the LLM."""
    return {
        "intentions": [
            {
                "nom": "Recherche locale",
                "description": "Trouver une salle proche",
                "volume": 1,
                "exemples": ["escape game paris", "escape game lyon"],
                "signal_linguistique": "paris, lyon",
                "ctr_moyen": 0.05,
                "position_moyenne": 2.4,
            },
            {
                "nom": "Prix",
                "description": "Comparer les tarifs",
                "volume": 1,
                "exemples": ["prix escape game"],
                "signal_linguistique": "prix; tarif",
                "ctr_moyen": 0.03,
                "position_moyenne": 6.2,
            },
            {
                "nom": "Comparaison",
                "description": "Comparer deux loisirs",
                "volume": 1,
                "exemples": ["escape game vs laser game"],
                "signal_linguistique": "vs",
                "ctr_moyen": 0.01,
                "position_moyenne": 12.5,
            },
        ],
        "patterns_linguistiques": {
            "mots_recurrents": ["escape", "game"],
            "structures_questions": [],
            "modificateurs_temporels": [],
            "termes_comparatifs": ["vs"],
        },
        "insights": {
            "biggest_opportunity": "Les requêtes prix sont en P6. Un contenu tarifaire gagnerait des clics.",
            "biggest_friction": "Les comparaisons sont en P12.",
            "quick_win": "Optimiser la page tarifs.",
        },
    }


@pytest.fixture
def sample_llm_reply(sample_analysis) -> str:
    """Raw LLM reply wrapping the analysis in prose and a code fence."""
    return "Voici l'analyse demandée :\n```json\n" + json.dumps(sample_analysis, ensure_ascii=False) + "\n```\nBonne lecture."


@pytest.fixture
def sample_csv() -> str:
    """Search Console export with French headers."""
    return (
        "Requêtes les plus fréquentes,Clics,Impressions,CTR,Position\n"
        "escape game paris,120,2400,5%,2.4\n"
        "prix escape game,30,900,3.33%,6.2\n"
        "escape game vs laser game,4,310,1.29%,12.5\n"
    )


# Environment configuration
def pytest_configure(config):
    """Configure pytest environment."""
    config.addinivalue_line("markers", "integration: mark test as integration test")

    os.environ.setdefault("ENVIRONMENT", "test")
    os.environ.setdefault("LOG_LEVEL", "INFO")
