"""API route handlers."""

from .analysis import router as analysis_router
from .quota import router as quota_router
