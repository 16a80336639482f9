"""
Pytest configuration and fixtures.

Shared builders for scoring inputs plus an in-memory SQLite database.
"""

from datetime import date

import pytest

from core.scorer.models import (
    EducationEntry,
    ExperienceEntry,
    JobDetails,
    SalaryRange,
    UserProfile,
)


FRONTEND_JOB_DESCRIPTION = (
    "We are hiring a senior frontend engineer to build our customer dashboard. "
    "You will work with React, TypeScript and Node.js, and deploy services on "
    "Kubernetes running in AWS. Requirements: 5+ years of experience building "
    "web applications. Bachelor's degree in Computer Science or equivalent."
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def frontend_job():
    return JobDetails(
        description=FRONTEND_JOB_DESCRIPTION,
        location="Remote",
        job_type="full-time",
        salary_range=SalaryRange(min=120000, max=150000, currency="USD"),
    )


@pytest.fixture
def frontend_profile():
    return UserProfile(
        skills=("React", "TypeScript", "Node.js", "Python"),
        experience=(
            ExperienceEntry(
                company="Acme",
                position="Frontend Engineer",
                start_date=date(2019, 1, 1),
                end_date=date(2024, 1, 1),
                skills_used=("React", "TypeScript"),
            ),
        ),
        education=(
            EducationEntry(
                institution="State University",
                degree="Bachelor of Science",
                field_of_study="Computer Science",
            ),
        ),
        preferred_locations=("Berlin",),
        preferred_job_types=("full-time",),
        salary_expectation=SalaryRange(min=100000, currency="USD"),
    )


@pytest.fixture
def sqlite_session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    from database.database import build_engine, build_session_factory, init_db

    engine = build_engine("sqlite://")
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()
