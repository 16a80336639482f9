#!/usr/bin/env python3
"""
Analysis endpoints - run a job match analysis for an application.
"""

import logging
from fastapi import APIRouter, Depends

from core.orchestrator import ScoringOrchestrator
from ..dependencies import get_orchestrator, get_user_id
from ..models.responses import AnalysisResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["analysis"])


@router.post("/{application_id}/analysis", response_model=AnalysisResponse)
async def analyze_application(
    application_id: str,
    user_id: str = Depends(get_user_id),
    orchestrator: ScoringOrchestrator = Depends(get_orchestrator)
):
    """
    Score the application's job against the user's profile.

    Consumes one job_analysis quota slot once the inputs are valid. Errors
    are returned with the status for their code (see exceptions.py).
    """
    result = await orchestrator.analyze_job_match(application_id, user_id)
    if not result.ok:
        raise result.error

    return AnalysisResponse(
        success=True,
        application_id=application_id,
        state=result.state.value,
        analysis=result.analysis.to_dict()
    )
