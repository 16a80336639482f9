import logging
from typing import Callable

from sqlalchemy.orm import Session

from core.usage.recorder import UsageLogEntry, UsageRecorder
from database.models import AIUsage
from database.repositories.usage import UsageRepository
from database.uow import unit_of_work

logger = logging.getLogger(__name__)


class SqlUsageRecorder(UsageRecorder):
    """Writes one ai_usage row per entry in its own transaction."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def record(self, entry: UsageLogEntry) -> None:
        with unit_of_work(self.session_factory, UsageRepository) as repo:
            repo.add(AIUsage(
                user_id=entry.user_id,
                operation_type=entry.operation_type,
                success=entry.success,
                tokens_used=entry.tokens_used,
                cost_estimate=entry.cost_estimate,
                latency_ms=entry.latency_ms,
                error_kind=entry.error_kind,
                error_message=entry.error_message,
                model_version=entry.model_version,
                created_at=entry.timestamp,
            ))
        logger.debug(f"Recorded usage user={entry.user_id} op={entry.operation_type} success={entry.success}")
