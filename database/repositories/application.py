import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from database.models import Application, UserEducation, UserExperience, UserProfile
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    def get_for_user(self, application_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Application]:
        """Application owned by user_id; another user's application is treated as missing."""
        stmt = select(Application).where(
            Application.id == application_id,
            Application.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        return self.db.get(Application, application_id)

    def get_profile(self, user_id: uuid.UUID) -> Optional[UserProfile]:
        stmt = (
            select(UserProfile)
            .where(UserProfile.user_id == user_id)
            .options(
                selectinload(UserProfile.experience),
                selectinload(UserProfile.education)
            )
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def save_analysis(
        self,
        application: Application,
        match_score: int,
        match_analysis: Dict[str, Any],
        analyzed_at: datetime
    ) -> Application:
        application.match_score = match_score
        application.match_analysis = match_analysis
        application.analyzed_at = analyzed_at
        self.db.flush()
        logger.info(f"Saved match analysis for application {application.id}: score={match_score}")
        return application

    def create_application(
        self,
        user_id: uuid.UUID,
        company: str,
        position: str,
        job_description: str,
        **fields: Any
    ) -> Application:
        return self.add(Application(
            user_id=user_id,
            company=company,
            position=position,
            job_description=job_description,
            **fields
        ))

    def create_profile(
        self,
        user_id: uuid.UUID,
        skills: Iterable[str],
        experience: Iterable[Dict[str, Any]] = (),
        education: Iterable[Dict[str, Any]] = (),
        **fields: Any
    ) -> UserProfile:
        profile = UserProfile(user_id=user_id, skills=list(skills), **fields)
        profile.experience = [UserExperience(**entry) for entry in experience]
        profile.education = [UserEducation(**entry) for entry in education]
        return self.add(profile)
