#!/usr/bin/env python3
"""
Scoring Orchestrator - Runs one job match analysis end to end.

Flow per call:
  LOADED -> SCORED -> QUOTA_CHECKED -> ADJUSTED -> PERSISTED

Terminal failures are FAILED (validation, upstream or persistence errors)
and QUOTA_REJECTED (local per-user quota exhausted). The returned
AnalysisResult records the state the run ended in.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional

from core.adjustment.client import AdjustmentClient
from core.config_loader import ScoringConfig
from core.errors import (
    NotFoundError,
    PersistenceError,
    ScoringError,
    ValidationError,
)
from core.quota.tracker import JOB_ANALYSIS, QuotaTracker, Rejected
from core.scorer.models import JobDetails, MatchAnalysis, UserProfile
from core.scorer.service import compute_base_score

logger = logging.getLogger(__name__)


class AnalysisState(str, Enum):
    LOADED = "loaded"
    SCORED = "scored"
    QUOTA_CHECKED = "quota_checked"
    ADJUSTED = "adjusted"
    PERSISTED = "persisted"
    FAILED = "failed"
    QUOTA_REJECTED = "quota_rejected"


@dataclass(frozen=True)
class LoadedApplication:
    job: JobDetails
    profile: Optional[UserProfile]


@dataclass(frozen=True)
class AnalysisResult:
    state: AnalysisState
    analysis: Optional[MatchAnalysis] = None
    error: Optional[ScoringError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.state == AnalysisState.PERSISTED


class MatchDataStore(ABC):
    """Loads scoring inputs and stores analyses. Implementations are blocking."""

    @abstractmethod
    def load_job_and_profile(self, application_id: str, user_id: str) -> Optional[LoadedApplication]:
        """Return None when the application does not exist for this user."""

    @abstractmethod
    def persist_match_analysis(self, application_id: str, analysis: MatchAnalysis) -> None:
        pass


class ScoringOrchestrator:
    def __init__(
        self,
        store: MatchDataStore,
        quota_tracker: QuotaTracker,
        adjustment_client: AdjustmentClient,
        scoring_config: Optional[ScoringConfig] = None,
        today: Callable[[], date] = date.today
    ):
        self.store = store
        self.quota_tracker = quota_tracker
        self.adjustment_client = adjustment_client
        self.scoring_config = scoring_config or ScoringConfig()
        self._today = today

    def _validate(self, loaded: LoadedApplication) -> Optional[ValidationError]:
        profile = loaded.profile
        if profile is None:
            return ValidationError("Please complete your profile before analyzing a job match.")
        if not profile.skills:
            return ValidationError("Please add skills to your profile before analyzing a job match.")
        min_chars = self.scoring_config.min_description_chars
        if len(loaded.job.description.strip()) < min_chars:
            return ValidationError(
                f"Job description is too short to analyze (minimum {min_chars} characters)."
            )
        return None

    async def _load(self, application_id: str, user_id: str) -> LoadedApplication:
        try:
            loaded = await asyncio.to_thread(self.store.load_job_and_profile, application_id, user_id)
        except ScoringError:
            raise
        except Exception as e:
            logger.error(f"Failed to load application {application_id}: {e}")
            raise PersistenceError("Could not load the application. Please try again.") from e
        if loaded is None:
            raise NotFoundError("Application not found.")
        return loaded

    async def _persist(self, application_id: str, analysis: MatchAnalysis) -> None:
        try:
            await asyncio.to_thread(self.store.persist_match_analysis, application_id, analysis)
        except Exception as e:
            logger.error(f"Failed to persist analysis for application {application_id}: {e}")
            raise PersistenceError("Could not save the match analysis. Please try again.") from e

    async def analyze_job_match(self, application_id: str, user_id: str) -> AnalysisResult:
        """Score, adjust and persist the match for one application.

        Args:
            application_id: Application to analyze
            user_id: Owner of the application and of the quota budget

        Returns:
            AnalysisResult with state PERSISTED and the analysis, or a
            terminal state carrying the error
        """
        application_id = str(application_id)
        user_id = str(user_id)

        try:
            loaded = await self._load(application_id, user_id)
        except ScoringError as e:
            logger.warning(f"Analysis of {application_id} failed while loading: {e.reason}")
            return AnalysisResult(state=AnalysisState.FAILED, error=e)

        invalid = self._validate(loaded)
        if invalid is not None:
            logger.info(f"Analysis of {application_id} rejected: {invalid.reason}")
            return AnalysisResult(state=AnalysisState.FAILED, error=invalid)
        logger.debug(f"Application {application_id}: {AnalysisState.LOADED.value}")

        base = compute_base_score(loaded.job, loaded.profile, as_of=self._today())
        logger.info(f"Application {application_id}: base score {base.total}")

        admission = self.quota_tracker.try_admit(user_id, JOB_ANALYSIS)
        if isinstance(admission, Rejected):
            error = admission.to_error()
            logger.info(f"Analysis of {application_id} quota rejected for user={user_id}")
            return AnalysisResult(state=AnalysisState.QUOTA_REJECTED, error=error)
        logger.debug(f"Application {application_id}: {AnalysisState.QUOTA_CHECKED.value}")

        adjusted = await self.adjustment_client.adjust(
            base, loaded.job, loaded.profile, user_id, admission
        )
        if not adjusted.ok:
            logger.warning(f"Analysis of {application_id} failed during adjustment: {adjusted.error.reason}")
            return AnalysisResult(state=AnalysisState.FAILED, error=adjusted.error)
        analysis = adjusted.value

        try:
            await self._persist(application_id, analysis)
        except PersistenceError as e:
            return AnalysisResult(state=AnalysisState.FAILED, analysis=analysis, error=e)

        logger.info(
            f"Application {application_id}: {AnalysisState.PERSISTED.value} "
            f"(score {analysis.adjusted_score})"
        )
        return AnalysisResult(state=AnalysisState.PERSISTED, analysis=analysis)
