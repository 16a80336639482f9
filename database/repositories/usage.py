from typing import List

from sqlalchemy import select

from database.models import AIUsage
from database.repositories.base import BaseRepository


class UsageRepository(BaseRepository):
    def list_for_user(self, user_id: str, limit: int = 100) -> List[AIUsage]:
        stmt = (
            select(AIUsage)
            .where(AIUsage.user_id == user_id)
            .order_by(AIUsage.created_at.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())
