#!/usr/bin/env python3
"""
Adjustment Client - Bounded reasoning-service adjustment of a base score.

Sends the base score breakdown together with a job and profile summary to
the reasoning service, validates what comes back, and turns it into a
MatchAnalysis. The upstream service is untrusted input: the adjustment is
clamped to +/-10 and the adjusted score is always recomputed locally and
clamped to 0-100.
"""

from typing import Callable, Optional
import asyncio
import json
import logging
import re
import time

from pydantic import ValidationError as PydanticValidationError

from core.errors import APIError, RateLimitError, Result, ScoringError
from core.llm.interfaces import ReasoningProvider
from core.llm.schema_models import MATCH_ADJUSTMENT_SCHEMA, MatchAdjustment
from core.llm.system_prompts import MATCH_ADJUSTMENT_SYSTEM_PROMPT
from core.quota.tracker import JOB_ANALYSIS, WINDOW_SECONDS, Admission, Admitted, Rejected
from core.scorer.models import (
    EDUCATION_MAX,
    EXPERIENCE_MAX,
    OTHER_MAX,
    SCORE_MAX,
    SKILLS_MAX,
    JobDetails,
    MatchAnalysis,
    ScoreBreakdown,
    UserProfile,
)
from core.usage.recorder import UsageLogEntry, UsageRecorder, record_safely
from core.utils import clamp, round_half_up

logger = logging.getLogger(__name__)

MAX_ADJUSTMENT = 10
DEFAULT_DESCRIPTION_CHAR_LIMIT = 3000

_CODE_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CODE_FENCE_CLOSE = re.compile(r"\s*```$")
# JSON has no unary plus, but models like to write "adjustment": +5
_PLUS_SIGNED_ADJUSTMENT = re.compile(r'("adjustment"\s*:\s*)\+(?=\d)')


def _format_salary(salary) -> str:
    if salary is None or (salary.min is None and salary.max is None):
        return "not specified"
    low = f"{salary.min:,.0f}" if salary.min is not None else "?"
    high = f"{salary.max:,.0f}" if salary.max is not None else "?"
    currency = f" {salary.currency}" if salary.currency else ""
    return f"{low} - {high}{currency}"


def build_job_summary(job: JobDetails, description_char_limit: int = DEFAULT_DESCRIPTION_CHAR_LIMIT) -> str:
    description = job.description[:description_char_limit]
    truncated = "\n...(truncated)" if len(job.description) > description_char_limit else ""
    return (
        f"Location: {job.location or 'not specified'}\n"
        f"Job type: {job.job_type or 'not specified'}\n"
        f"Salary: {_format_salary(job.salary_range)}\n\n"
        f"Description:\n{description}{truncated}"
    )


def build_profile_summary(profile: UserProfile) -> str:
    experience = "\n".join(
        f"- {e.position} at {e.company} ({e.start_date.isoformat()} - "
        f"{e.end_date.isoformat() if e.end_date else 'Present'})"
        + (f"; skills: {', '.join(e.skills_used)}" if e.skills_used else "")
        for e in profile.experience
    ) or "- none listed"
    education = "\n".join(
        f"- {e.degree} in {e.field_of_study or 'N/A'} from {e.institution}"
        for e in profile.education
    ) or "- none listed"
    return (
        f"Skills: {', '.join(profile.skills) or 'none listed'}\n\n"
        f"Experience:\n{experience}\n\n"
        f"Education:\n{education}\n\n"
        f"Preferred locations: {', '.join(profile.preferred_locations) or 'any'}\n"
        f"Preferred job types: {', '.join(profile.preferred_job_types) or 'any'}\n"
        f"Salary expectation: {_format_salary(profile.salary_expectation)}"
    )


def build_user_message(
    base: ScoreBreakdown,
    job: JobDetails,
    profile: UserProfile,
    description_char_limit: int = DEFAULT_DESCRIPTION_CHAR_LIMIT
) -> str:
    """Render the {base_score, job_summary, profile_summary} request."""
    detected = len(base.matching_skills) + len(base.missing_skills)
    return (
        f"BASE MATCH SCORE: {base.total}/{SCORE_MAX}\n\n"
        f"BREAKDOWN (formula-based):\n"
        f"- Skills: {base.skills_score}/{SKILLS_MAX} "
        f"({len(base.matching_skills)}/{detected} detected skills matched)\n"
        f"- Experience: {base.experience_score}/{EXPERIENCE_MAX} "
        f"({base.relevant_years:.1f} years relevant, {base.required_years} required)\n"
        f"- Education: {base.education_score}/{EDUCATION_MAX} "
        f"({base.user_highest_degree} vs {base.required_degree} required)\n"
        f"- Other: {base.other_score}/{OTHER_MAX}\n\n"
        f"NOTE: Skill detection used a fixed keyword list and may be incomplete.\n\n"
        f"USER PROFILE:\n{build_profile_summary(profile)}\n\n"
        f"JOB:\n{build_job_summary(job, description_char_limit)}"
    )


def parse_adjustment(content: str) -> MatchAdjustment:
    """Parse and validate the reasoning service's JSON document.

    Raises:
        APIError: content is not JSON, not an object, or fails validation
    """
    text = (content or "").strip()
    if text.startswith("```"):
        text = _CODE_FENCE_CLOSE.sub("", _CODE_FENCE_OPEN.sub("", text))
    text = _PLUS_SIGNED_ADJUSTMENT.sub(r"\1", text)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise APIError("The reasoning service returned a response that is not valid JSON.") from e

    if not isinstance(data, dict):
        raise APIError("The reasoning service returned an unexpected response shape.")

    try:
        return MatchAdjustment.model_validate(data)
    except PydanticValidationError as e:
        fields = ", ".join(sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()}))
        raise APIError(f"The reasoning service response failed validation ({fields}).") from e


def build_analysis(base: ScoreBreakdown, payload: MatchAdjustment) -> MatchAnalysis:
    """Merge the base score with a validated adjustment."""
    adjustment = round_half_up(payload.adjustment)
    bounded = int(clamp(adjustment, -MAX_ADJUSTMENT, MAX_ADJUSTMENT))
    if bounded != adjustment:
        logger.warning(f"Upstream adjustment {payload.adjustment} outside +/-{MAX_ADJUSTMENT}, clamped to {bounded}")

    adjusted_score = int(clamp(base.total + bounded, 0, SCORE_MAX))

    return MatchAnalysis(
        base_score=base.total,
        adjusted_score=adjusted_score,
        adjustment=bounded,
        reasoning=payload.reasoning,
        breakdown=base,
        matching_skills=tuple(payload.matching_skills or base.matching_skills),
        missing_skills=tuple(payload.missing_skills or base.missing_skills),
        strengths=tuple(payload.strengths),
        concerns=tuple(payload.concerns),
        recommendations=tuple(payload.recommendations),
    )


class AdjustmentClient:
    """
    Wraps a single reasoning-service call per analysis.

    The caller must have admitted the call through the QuotaTracker and
    passes the resulting admission in; retries inside the provider reuse
    that admission and never consume quota again. An admission is only
    honoured while its quota window is live, measured on the tracker's clock.
    """

    def __init__(
        self,
        provider: ReasoningProvider,
        usage_recorder: Optional[UsageRecorder] = None,
        description_char_limit: int = DEFAULT_DESCRIPTION_CHAR_LIMIT,
        clock: Callable[[], float] = time.time,
        window_seconds: int = WINDOW_SECONDS
    ):
        self.provider = provider
        self.usage_recorder = usage_recorder
        self.description_char_limit = description_char_limit
        self._clock = clock
        self.window_seconds = window_seconds

    def _check_admission(self, user_id: str, admission: Optional[Admission]) -> Optional[RateLimitError]:
        if isinstance(admission, Rejected):
            return admission.to_error()
        if (
            not isinstance(admission, Admitted)
            or admission.operation_type != JOB_ANALYSIS
            or admission.user_id != str(user_id)
        ):
            return RateLimitError(
                "Job analysis was not admitted by the quota tracker.",
                operation_type=JOB_ANALYSIS,
            )
        if self._clock() - admission.window_start > self.window_seconds:
            return RateLimitError(
                "Job analysis admission has expired. Please try again.",
                operation_type=JOB_ANALYSIS,
                limit=admission.limit,
            )
        return None

    def _usage_entry(
        self,
        user_id: str,
        started: float,
        success: bool,
        tokens_used: Optional[int] = None,
        model: Optional[str] = None,
        error: Optional[ScoringError] = None,
        error_kind: Optional[str] = None
    ) -> UsageLogEntry:
        return UsageLogEntry(
            user_id=str(user_id),
            operation_type=JOB_ANALYSIS,
            success=success,
            tokens_used=tokens_used,
            latency_ms=int((time.perf_counter() - started) * 1000),
            error_kind=error_kind or (error.code if error else None),
            error_message=error.reason if error else None,
            model_version=model,
        )

    async def _record(self, entry: UsageLogEntry) -> None:
        # Recorders may do blocking database work
        await asyncio.to_thread(record_safely, self.usage_recorder, entry)

    async def adjust(
        self,
        base: ScoreBreakdown,
        job: JobDetails,
        profile: UserProfile,
        user_id: str,
        admission: Optional[Admission]
    ) -> Result[MatchAnalysis]:
        """Adjust a base score through the reasoning service.

        Args:
            base: Deterministic base score
            job: Job the base score was computed for
            profile: Profile the base score was computed for
            user_id: User the call is billed to
            admission: Result of QuotaTracker.try_admit for job_analysis

        Returns:
            Result holding the MatchAnalysis, or RateLimitError,
            QuotaExceededError or APIError
        """
        rejection = self._check_admission(user_id, admission)
        if rejection is not None:
            logger.warning(f"Adjustment refused for user={user_id}: {rejection.reason}")
            return Result.failure(rejection)

        user_message = build_user_message(base, job, profile, self.description_char_limit)
        started = time.perf_counter()

        try:
            response = await self.provider.complete_json(
                MATCH_ADJUSTMENT_SYSTEM_PROMPT,
                user_message,
                MATCH_ADJUSTMENT_SCHEMA,
            )
        except asyncio.CancelledError:
            # The admitted slot stays consumed: the upstream cost may already be incurred.
            # Recorded inline so the entry is written before cancellation propagates.
            record_safely(
                self.usage_recorder,
                self._usage_entry(user_id, started, success=False, error_kind="cancelled"),
            )
            raise
        except ScoringError as e:
            await self._record(self._usage_entry(user_id, started, success=False, error=e))
            return Result.failure(e)

        try:
            payload = parse_adjustment(response.content)
        except APIError as e:
            logger.warning(f"Invalid adjustment response for user={user_id}: {e.reason}")
            await self._record(self._usage_entry(
                user_id, started, success=False,
                tokens_used=response.tokens_used, model=response.model, error=e,
            ))
            return Result.failure(e)

        await self._record(self._usage_entry(
            user_id, started, success=True,
            tokens_used=response.tokens_used, model=response.model,
        ))
        analysis = build_analysis(base, payload)
        logger.info(
            f"Adjusted score for user={user_id}: {analysis.base_score} -> "
            f"{analysis.adjusted_score} ({analysis.adjustment:+d})"
        )
        return Result.success(analysis)
