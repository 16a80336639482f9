import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Text, Boolean, Date, Numeric, TIMESTAMP, ForeignKey, Uuid, Index
from sqlalchemy.orm import relationship

from .base import Base, JsonDocument


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(Base):
    """
    Candidate profile used as the scoring input for every application.

    Skills and preferences are stored as JSON lists of strings.
    """
    __tablename__ = 'user_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, unique=True)

    skills = Column(JsonDocument, nullable=False, default=list)
    preferred_locations = Column(JsonDocument, nullable=False, default=list)
    preferred_job_types = Column(JsonDocument, nullable=False, default=list)

    salary_min = Column(Numeric(12, 2))
    salary_max = Column(Numeric(12, 2))
    salary_currency = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    experience = relationship(
        "UserExperience",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="UserExperience.start_date",
    )
    education = relationship(
        "UserEducation",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="UserEducation.end_date",
    )


class UserExperience(Base):
    __tablename__ = 'user_experience'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id = Column(Uuid, ForeignKey('user_profiles.id', ondelete='CASCADE'), nullable=False)

    company = Column(Text, nullable=False)
    position = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    is_current = Column(Boolean, nullable=False, default=False)
    skills_used = Column(JsonDocument, nullable=False, default=list)
    description = Column(Text)

    profile = relationship("UserProfile", back_populates="experience")

    __table_args__ = (
        Index('idx_user_experience_profile', 'profile_id'),
    )


class UserEducation(Base):
    __tablename__ = 'user_education'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id = Column(Uuid, ForeignKey('user_profiles.id', ondelete='CASCADE'), nullable=False)

    institution = Column(Text, nullable=False)
    degree = Column(Text, nullable=False)
    field_of_study = Column(Text)
    end_date = Column(Date)

    profile = relationship("UserProfile", back_populates="education")

    __table_args__ = (
        Index('idx_user_education_profile', 'profile_id'),
    )
