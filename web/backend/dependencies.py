#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from core.app_context import AppContext
from core.config_loader import AppConfig, load_config
from core.orchestrator import ScoringOrchestrator
from core.quota.tracker import QuotaTracker


@lru_cache()
def get_config() -> AppConfig:
    """Application configuration, loaded once per process."""
    return load_config()


@lru_cache()
def get_app_context() -> AppContext:
    """
    Wired application context, built on first use.

    Built lazily so importing the app does not require a reasoning API key.
    """
    return AppContext.build(get_config())


def get_orchestrator(context: AppContext = Depends(get_app_context)) -> ScoringOrchestrator:
    return context.orchestrator


def get_quota_tracker(context: AppContext = Depends(get_app_context)) -> QuotaTracker:
    return context.quota_tracker


def get_user_id(x_user_id: Optional[str] = Header(default=None, alias="X-User-Id")) -> str:
    """
    Caller identity from the X-User-Id header.

    Authentication happens upstream of this service.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return x_user_id.strip()
