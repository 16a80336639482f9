"""
SQL-backed MatchDataStore.

Maps ORM rows to the immutable scoring snapshots and writes analyses back
onto the application row. Each call runs in its own unit of work.
"""
import logging
import uuid
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from core.orchestrator import LoadedApplication, MatchDataStore
from core.scorer.models import (
    EducationEntry,
    ExperienceEntry,
    JobDetails,
    MatchAnalysis,
    SalaryRange,
    UserProfile,
)
from database import models
from database.repositories.application import ApplicationRepository
from database.uow import unit_of_work

logger = logging.getLogger(__name__)


def _as_uuid(value: Any) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _salary(low: Any, high: Any, currency: Optional[str]) -> Optional[SalaryRange]:
    if low is None and high is None:
        return None
    return SalaryRange(min=_as_float(low), max=_as_float(high), currency=currency)


def job_from_row(row: models.Application) -> JobDetails:
    return JobDetails(
        description=row.job_description or "",
        location=row.location,
        job_type=row.job_type,
        salary_range=_salary(row.salary_min, row.salary_max, row.salary_currency),
    )


def profile_from_row(row: models.UserProfile) -> UserProfile:
    return UserProfile(
        skills=tuple(row.skills or ()),
        experience=tuple(
            ExperienceEntry(
                company=e.company,
                position=e.position,
                start_date=e.start_date,
                end_date=e.end_date,
                is_current=bool(e.is_current),
                skills_used=tuple(e.skills_used or ()),
            )
            for e in row.experience
        ),
        education=tuple(
            EducationEntry(
                institution=e.institution,
                degree=e.degree,
                field_of_study=e.field_of_study,
                end_date=e.end_date,
            )
            for e in row.education
        ),
        preferred_locations=tuple(row.preferred_locations or ()),
        preferred_job_types=tuple(row.preferred_job_types or ()),
        salary_expectation=_salary(row.salary_min, row.salary_max, row.salary_currency),
    )


class SqlMatchDataStore(MatchDataStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load_job_and_profile(self, application_id: str, user_id: str) -> Optional[LoadedApplication]:
        app_uuid = _as_uuid(application_id)
        user_uuid = _as_uuid(user_id)
        if app_uuid is None or user_uuid is None:
            logger.debug(f"Malformed id in lookup: application={application_id!r} user={user_id!r}")
            return None

        with unit_of_work(self.session_factory, ApplicationRepository) as repo:
            application = repo.get_for_user(app_uuid, user_uuid)
            if application is None:
                return None
            profile_row = repo.get_profile(user_uuid)
            return LoadedApplication(
                job=job_from_row(application),
                profile=profile_from_row(profile_row) if profile_row is not None else None,
            )

    def persist_match_analysis(self, application_id: str, analysis: MatchAnalysis) -> None:
        app_uuid = _as_uuid(application_id)
        with unit_of_work(self.session_factory, ApplicationRepository) as repo:
            application = repo.get_by_id(app_uuid) if app_uuid is not None else None
            if application is None:
                raise LookupError(f"Application {application_id} no longer exists")
            repo.save_analysis(
                application,
                match_score=analysis.adjusted_score,
                match_analysis=analysis.to_dict(),
                analyzed_at=analysis.analyzed_at,
            )
