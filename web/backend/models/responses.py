#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class ScoreComponents(BaseModel):
    skills_score: int = Field(ge=0, le=40)
    experience_score: int = Field(ge=0, le=30)
    education_score: int = Field(ge=0, le=15)
    other_score: int = Field(ge=0, le=15)


class MatchAnalysisDetail(BaseModel):
    """Adjusted match analysis for one application."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "base_score": 84,
                "adjusted_score": 89,
                "adjustment": 5,
                "reasoning": "Strong frontend overlap; Kubernetes is learnable.",
                "matching_skills": ["React", "TypeScript", "Node.js"],
                "missing_skills": ["Kubernetes", "AWS"],
                "strengths": ["Five years of React"],
                "concerns": ["No cloud experience listed"],
                "recommendations": ["Mention any AWS side projects"],
                "breakdown": {
                    "skills_score": 24,
                    "experience_score": 30,
                    "education_score": 15,
                    "other_score": 15
                },
                "analyzed_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    base_score: int = Field(ge=0, le=100)
    adjusted_score: int = Field(ge=0, le=100)
    adjustment: int = Field(ge=-10, le=10)
    reasoning: str
    matching_skills: List[str]
    missing_skills: List[str]
    strengths: List[str]
    concerns: List[str]
    recommendations: List[str]
    breakdown: ScoreComponents
    analyzed_at: str


class AnalysisResponse(BaseModel):
    """Response for a completed analysis."""
    success: bool
    application_id: str
    state: str
    analysis: MatchAnalysisDetail


class OperationQuota(BaseModel):
    limit: int
    used: int
    remaining: int
    window_resets_in_seconds: Optional[int] = None


class QuotaResponse(BaseModel):
    """Remaining hourly quota per operation type."""
    success: bool
    user_id: str
    quota: Dict[str, OperationQuota]
