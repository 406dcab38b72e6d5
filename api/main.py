"""
Evidence Analyzer - FastAPI Application

API server for compliance evidence review: document insight, requirement
matching, gap analysis and checklist reports.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from config.logging_config import setup_logging
from api.routes import analysis, reports
from api.middleware.error_handler import setup_error_handlers
from api.middleware.logging import LoggingMiddleware
from api.middleware.rate_limit import setup_rate_limiting

# Set up logging
logger = setup_logging()

SERVICE_NAME = "Evidence Analyzer Service"
SERVICE_VERSION = "2.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management."""
    logger.info("Starting Evidence Analyzer API...")
    logger.info(f"Environment: {settings.api_env}")
    logger.info(f"LLM Provider: {settings.llm_provider.value} ({settings.default_model})")
    if not settings.active_api_key:
        logger.warning("No LLM API key configured: matching returns 503, gaps and suggestions use heuristics")
    logger.info(f"Checklist service: {settings.checklist_service_url}")

    yield

    logger.info("Shutting down Evidence Analyzer API...")


app = FastAPI(
    title="Evidence Analyzer API",
    description="Compliance evidence analysis with deterministic fallbacks",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Set up error handlers (before middleware)
setup_error_handlers(app)

# Set up rate limiting
setup_rate_limiting(app)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# Configure CORS (should be last middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# API Routes
# ============================================================================

app.include_router(analysis.router, prefix="/analyze", tags=["Analysis"])
app.include_router(reports.router, prefix="/report", tags=["Reports"])


@app.get("/")
async def root():
    """Service metadata."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "message": "Use /analyze/document, /analyze/match, or /analyze/gaps for compliance insights.",
        "endpoints": ["/analyze/document", "/analyze/match", "/analyze/gaps", "/docs"],
        "environment": settings.api_env,
        "llm_provider": settings.llm_provider.value,
        "model": settings.default_model,
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.api_env
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
