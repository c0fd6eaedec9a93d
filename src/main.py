"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from squad.catalog import load_hero_index

from . import __version__
from .api.deps import get_hero_index, get_report_source
from .api.rest.routes import error_body, router as battle_router
from .api.websocket.handlers import handle_analysis_websocket
from .application.use_cases.analyze_reports import AnalyzeReportsUseCase
from .config import service_config_from_env
from .infrastructure.adapters import build_report_source

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    config = service_config_from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.config = config
    # Tests may install their own collaborators before startup.
    if getattr(app.state, "hero_index", None) is None:
        app.state.hero_index = load_hero_index(config.hero_catalog)
    if getattr(app.state, "report_source", None) is None:
        app.state.report_source = build_report_source(config)
    logger.info(
        "Squad Assistant API started (report source=%s, catalog=%s)",
        config.report_source,
        app.state.hero_index.version,
    )
    yield


app = FastAPI(
    title="Squad Assistant API",
    description="Battle report analysis API for Squad Assistant",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Next.js dev server
        "http://localhost:5173",  # Vite dev server
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed query parameters and bodies in the error envelope."""
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"detail": error_body("INVALID_REQUEST", "Invalid request", {"errors": errors})},
    )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    report_source: str
    catalog_version: str | None


@app.get("/", tags=["meta"])
async def root():
    """API root with information and available endpoints."""
    return {
        "name": "Squad Assistant API",
        "version": __version__,
        "description": "Battle report analysis API",
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "list": "GET /api/battle/analyze?profileId=...",
            "get": "GET /api/battle/analyze/{reportId}",
            "inline": "POST /api/battle/analyze",
            "websocket": "WS /ws/analyze",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health_check():
    """Check API health and configuration status."""
    config = getattr(app.state, "config", None) or service_config_from_env()
    hero_index = getattr(app.state, "hero_index", None)
    return HealthResponse(
        status="healthy",
        version=__version__,
        report_source=config.report_source,
        catalog_version=hero_index.version if hero_index else None,
    )


# Include REST routes
app.include_router(battle_router)


# WebSocket endpoint for batch analysis with progress
@app.websocket("/ws/analyze")
async def websocket_analyze(websocket: WebSocket):
    """WebSocket endpoint for analyzing all of a profile's reports.

    Connect to this endpoint and send:
    {
        "action": "analyze",
        "profileId": "profile-123",
        "limit": 200              // Optional
    }

    You will receive progress updates, then:
    {
        "status": "completed",
        "progress": 100,
        "message": "Analysis ready!",
        "count": 3,
        "analyses": [ ... ]
    }
    """
    use_case = AnalyzeReportsUseCase(get_report_source(websocket), get_hero_index(websocket))
    await handle_analysis_websocket(websocket, use_case)
