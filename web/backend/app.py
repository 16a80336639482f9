#!/usr/bin/env python3
"""
ApplyTrack Match Scoring - FastAPI Application

Usage:
    python main.py serve

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from core.errors import ScoringError
from .exceptions import (
    scoring_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import analysis_router, quota_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create the FastAPI app. Dependencies are wired lazily on first request."""
    app = FastAPI(
        title="ApplyTrack Match Scoring API",
        description="Score job applications against the candidate's profile",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Register exception handlers
    app.add_exception_handler(ScoringError, scoring_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(analysis_router)
    app.include_router(quota_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "applytrack-scoring"}

    return app


app = create_app()
