"""FastAPI application entry point.

GSC Intention Analyzer API server with endpoints for:
- Search Console CSV parsing
- LLM intention discovery and query classification
- Position x Intention reporting
"""

import logging
import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.analyzer.core.errors import PipelineError, RequestValidationFailure
from apps.analyzer.observability.logger import clear_context, set_context
from apps.analyzer.routers import analyze, health, queries, report
from apps.analyzer.routers.health import SERVICE_VERSION

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("=" * 60)
    logger.info("GSC Intention Analyzer - API Server Starting")
    logger.info("=" * 60)

    logger.info(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"Log Level: {os.getenv('LOG_LEVEL', 'INFO')}")
    logger.info(f"CORS Origins: {', '.join(cors_origins)}")

    yield

    logger.info("API Server shutting down...")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="GSC Intention Analyzer API",
    description="Discover search intentions in Search Console query exports",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
cors_origins = [origin.strip() for origin in cors_origins if origin.strip()]
if not cors_origins:
    cors_origins = ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(health.router)
app.include_router(queries.router)
app.include_router(analyze.router)
app.include_router(report.router)


@app.middleware("http")
async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag logs with a request id and echo it back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    set_context(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RequestValidationFailure)
async def request_validation_failure_handler(request: Request, exc: RequestValidationFailure) -> JSONResponse:
    """Reject a request before any external call."""
    logger.info(f"Request rejected: {exc.error}", extra={"path": request.url.path})
    return JSONResponse(status_code=400, content=exc.to_body())


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """Downstream failure after the request was accepted."""
    logger.error(
        f"Pipeline failed at {exc.stage}: {exc.details}",
        extra={"path": request.url.path, "stage": exc.stage, "category": exc.category.value},
    )
    return JSONResponse(status_code=500, content=exc.to_body())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler with request correlation."""
    request_id = (
        getattr(request.state, "request_id", None)
        or request.headers.get(REQUEST_ID_HEADER)
        or uuid.uuid4().hex[:8]
    )

    logger.error(
        f"Unhandled exception [request_id={request_id}]: {exc}",
        exc_info=True,
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
        },
    )

    is_development = os.getenv("ENVIRONMENT", "development") == "development"

    if is_development:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": str(exc),
                "type": type(exc).__name__,
                "request_id": request_id,
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "request_id": request_id,
        },
    )


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.analyzer.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
