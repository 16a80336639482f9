"""
Tests for the SQL data store and usage recorder on in-memory SQLite.
"""
import uuid
from datetime import date, datetime, timezone

import pytest

from core.scorer.models import MatchAnalysis, ScoreBreakdown
from core.usage.recorder import UsageLogEntry
from database.models import Application, AIUsage
from database.repositories import ApplicationRepository, UsageRepository
from database.store import SqlMatchDataStore
from database.uow import unit_of_work
from database.usage_recorder import SqlUsageRecorder

pytestmark = pytest.mark.db

USER_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")


def _analysis(score=89):
    breakdown = ScoreBreakdown(
        skills_score=24, experience_score=30, education_score=15, other_score=15, total=84,
        matching_skills=("React",), missing_skills=("AWS",),
    )
    return MatchAnalysis(
        base_score=84,
        adjusted_score=score,
        adjustment=score - 84,
        reasoning="Solid match.",
        breakdown=breakdown,
        matching_skills=("React",),
        missing_skills=("AWS",),
        analyzed_at=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def seeded(sqlite_session_factory):
    with unit_of_work(sqlite_session_factory, ApplicationRepository) as repo:
        application = repo.create_application(
            user_id=USER_ID,
            company="Acme",
            position="Frontend Engineer",
            job_description="React and TypeScript dashboards for analytics customers.",
            location="Remote",
            job_type="full-time",
            salary_min=120000,
            salary_currency="USD",
        )
        repo.create_profile(
            user_id=USER_ID,
            skills=["React", "TypeScript"],
            preferred_job_types=["full-time"],
            salary_min=100000,
            salary_currency="USD",
            experience=[{
                "company": "Initech",
                "position": "Engineer",
                "start_date": date(2019, 1, 1),
                "end_date": date(2024, 1, 1),
                "skills_used": ["React"],
            }],
            education=[{
                "institution": "State University",
                "degree": "Bachelor of Science",
                "field_of_study": "Computer Science",
            }],
        )
        application_id = application.id
    return sqlite_session_factory, application_id


class TestSqlMatchDataStore:

    def test_loads_job_and_profile(self, seeded):
        session_factory, application_id = seeded
        store = SqlMatchDataStore(session_factory)

        loaded = store.load_job_and_profile(str(application_id), str(USER_ID))

        assert loaded.job.location == "Remote"
        assert loaded.job.salary_range.min == 120000.0
        assert loaded.job.salary_range.max is None
        assert loaded.profile.skills == ("React", "TypeScript")
        assert loaded.profile.experience[0].start_date == date(2019, 1, 1)
        assert loaded.profile.experience[0].skills_used == ("React",)
        assert loaded.profile.education[0].degree == "Bachelor of Science"
        assert loaded.profile.salary_expectation.currency == "USD"

    def test_other_users_application_is_not_found(self, seeded):
        session_factory, application_id = seeded
        store = SqlMatchDataStore(session_factory)

        assert store.load_job_and_profile(str(application_id), str(OTHER_USER_ID)) is None

    def test_malformed_ids_are_not_found(self, seeded):
        session_factory, _ = seeded
        store = SqlMatchDataStore(session_factory)

        assert store.load_job_and_profile("not-a-uuid", str(USER_ID)) is None

    def test_missing_profile_loads_as_none(self, sqlite_session_factory):
        with unit_of_work(sqlite_session_factory, ApplicationRepository) as repo:
            application = repo.create_application(
                user_id=OTHER_USER_ID,
                company="Globex",
                position="Analyst",
                job_description="Spreadsheet work",
            )
            application_id = application.id

        loaded = SqlMatchDataStore(sqlite_session_factory).load_job_and_profile(
            str(application_id), str(OTHER_USER_ID)
        )
        assert loaded.profile is None

    def test_persist_writes_score_and_document(self, seeded):
        session_factory, application_id = seeded
        store = SqlMatchDataStore(session_factory)

        store.persist_match_analysis(str(application_id), _analysis(89))
        store.persist_match_analysis(str(application_id), _analysis(80))

        with unit_of_work(session_factory, ApplicationRepository) as repo:
            row = repo.get_by_id(application_id)
            assert row.match_score == 80
            assert row.match_analysis["adjusted_score"] == 80
            assert row.match_analysis["breakdown"]["skills_score"] == 24
            assert row.analyzed_at is not None

    def test_persist_unknown_application_raises(self, sqlite_session_factory):
        store = SqlMatchDataStore(sqlite_session_factory)
        with pytest.raises(LookupError):
            store.persist_match_analysis(str(uuid.uuid4()), _analysis())


class TestSqlUsageRecorder:

    def test_records_entry(self, sqlite_session_factory):
        recorder = SqlUsageRecorder(sqlite_session_factory)
        recorder.record(UsageLogEntry(
            user_id="user-1",
            operation_type="job_analysis",
            success=False,
            tokens_used=1000,
            latency_ms=812,
            error_kind="UPSTREAM_FAILED",
            error_message="bad gateway",
            model_version="gpt-test",
        ))

        with unit_of_work(sqlite_session_factory, UsageRepository) as repo:
            [row] = repo.list_for_user("user-1")
            assert isinstance(row, AIUsage)
            assert row.success is False
            assert row.tokens_used == 1000
            assert row.cost_estimate == pytest.approx(0.0078)
            assert row.error_kind == "UPSTREAM_FAILED"


class TestUnitOfWork:

    def test_rolls_back_on_error(self, sqlite_session_factory):
        with pytest.raises(RuntimeError):
            with unit_of_work(sqlite_session_factory, ApplicationRepository) as repo:
                repo.create_application(
                    user_id=USER_ID, company="Rollback", position="x", job_description="y",
                )
                raise RuntimeError("abort")

        with unit_of_work(sqlite_session_factory, ApplicationRepository) as repo:
            rows = repo.db.query(Application).filter_by(company="Rollback").all()
            assert rows == []
