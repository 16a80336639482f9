import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Text, Integer, Numeric, TIMESTAMP, Uuid, Index

from .base import Base, JsonDocument


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Application(Base):
    """
    A job a user is applying to, plus the latest match analysis for it.

    match_score and match_analysis are overwritten on every re-analysis;
    the most recent write wins.
    """
    __tablename__ = 'applications'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False)

    company = Column(Text, nullable=False)
    position = Column(Text, nullable=False)
    job_description = Column(Text)
    location = Column(Text)
    job_type = Column(Text)

    salary_min = Column(Numeric(12, 2))
    salary_max = Column(Numeric(12, 2))
    salary_currency = Column(Text)

    status = Column(Text, nullable=False, default='saved')

    match_score = Column(Integer)
    match_analysis = Column(JsonDocument)
    analyzed_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index('idx_applications_user', 'user_id'),
        Index('idx_applications_match_score', 'match_score'),
    )
