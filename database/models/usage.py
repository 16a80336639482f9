import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Text, Boolean, Integer, Float, TIMESTAMP, Uuid, Index

from .base import Base


class AIUsage(Base):
    """
    Append-only audit row per reasoning-service call attempt.

    user_id is kept as text so entries from any caller identity are accepted.
    """
    __tablename__ = 'ai_usage'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)
    operation_type = Column(Text, nullable=False)
    success = Column(Boolean, nullable=False)

    tokens_used = Column(Integer)
    cost_estimate = Column(Float)
    latency_ms = Column(Integer)
    error_kind = Column(Text)
    error_message = Column(Text)
    model_version = Column(Text)

    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index('idx_ai_usage_user_op_created', 'user_id', 'operation_type', 'created_at'),
    )
