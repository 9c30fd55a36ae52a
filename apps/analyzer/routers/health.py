"""Health check router.

Handles health check endpoints for service monitoring.
"""

import importlib.util
import logging
import os

from fastapi import APIRouter
from pydantic import BaseModel

from apps.analyzer.llm.schemas import Provider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SERVICE_VERSION = "0.1.0"

# Import name of each provider SDK
PROVIDER_SDK_MODULES: dict[Provider, str] = {
    Provider.ANTHROPIC: "anthropic",
    Provider.OPENAI: "openai",
    Provider.GEMINI: "google.genai",
}


# =============================================================================
# Pydantic Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Detailed health check response."""

    providers: dict[str, str]


# =============================================================================
# Endpoints
# =============================================================================


def _sdk_available(module_name: str) -> bool:
    try:
        return importlib.util.find_spec(module_name) is not None
    except ModuleNotFoundError:
        return False


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        environment=os.getenv("ENVIRONMENT", "development"),
    )


@router.get("/health/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check() -> DetailedHealthResponse:
    """Health check with provider SDK availability.

    No provider is contacted: keys belong to callers, so connectivity
    cannot be checked here.
    """
    providers: dict[str, str] = {}
    overall_healthy = True

    for provider, module_name in PROVIDER_SDK_MODULES.items():
        if _sdk_available(module_name):
            providers[provider.value] = "available"
        else:
            providers[provider.value] = "sdk_missing"
            overall_healthy = False
            logger.warning(f"{provider.display_name} SDK is not installed ({module_name})")

    return DetailedHealthResponse(
        status="healthy" if overall_healthy else "degraded",
        version=SERVICE_VERSION,
        environment=os.getenv("ENVIRONMENT", "development"),
        providers=providers,
    )
