"""
Pydantic models for the JSON documents exchanged with the reasoning service.

This module provides:
1. The validated shape of a match-adjustment response
2. Runtime JSON schema generation for OpenAI structured output
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class MatchAdjustment(BaseModel):
    """Reasoning service verdict on a base match score."""
    model_config = ConfigDict(extra='ignore')

    adjustment: float = Field(
        allow_inf_nan=False,
        description="Points to add to the base score, between -10 and +10"
    )
    reasoning: str = Field(description="Why the base score was adjusted")
    strengths: List[str] = Field(default_factory=list, description="Specific advantages of this candidate")
    concerns: List[str] = Field(default_factory=list, description="Specific gaps or red flags")
    recommendations: List[str] = Field(
        default_factory=list,
        description="Actionable advice for this specific job"
    )
    matching_skills: Optional[List[str]] = Field(
        default=None,
        description="Skills from the user profile that match the job requirements"
    )
    missing_skills: Optional[List[str]] = Field(
        default=None,
        description="Skills required by the job that the user lacks"
    )


MATCH_ADJUSTMENT_SCHEMA = {
    "name": "match_adjustment_schema",
    "strict": False,
    "schema": MatchAdjustment.model_json_schema()
}
