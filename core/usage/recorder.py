"""
Usage Recorder - Append-only audit trail of reasoning service calls.

Every attempted call (success or failure) is recorded for auditing and cost
control. Recording is best-effort: record_safely() never lets a logging
failure reach the scoring operation.
"""
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

logger = logging.getLogger(__name__)

# Simplified pricing: 60% input tokens at $3/MTok, 40% output at $15/MTok
INPUT_SHARE = 0.6
OUTPUT_SHARE = 0.4
INPUT_COST_PER_MILLION = 3.0
OUTPUT_COST_PER_MILLION = 15.0


def estimate_cost(tokens_used: Optional[int]) -> Optional[float]:
    """Rough USD cost estimate for a call's total token count."""
    if not tokens_used:
        return None
    input_tokens = int(tokens_used * INPUT_SHARE)
    output_tokens = int(tokens_used * OUTPUT_SHARE)
    return (
        input_tokens / 1_000_000 * INPUT_COST_PER_MILLION
        + output_tokens / 1_000_000 * OUTPUT_COST_PER_MILLION
    )


@dataclass(frozen=True)
class UsageLogEntry:
    user_id: str
    operation_type: str
    success: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tokens_used: Optional[int] = None
    latency_ms: Optional[int] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    model_version: Optional[str] = None

    @property
    def cost_estimate(self) -> Optional[float]:
        return estimate_cost(self.tokens_used)


class UsageRecorder(ABC):
    """Sink for usage entries. Implementations may raise; callers use record_safely()."""

    @abstractmethod
    def record(self, entry: UsageLogEntry) -> None:
        pass


class InMemoryUsageRecorder(UsageRecorder):
    """Keeps entries in process memory; used when durable usage logging is disabled."""

    def __init__(self):
        self._entries: List[UsageLogEntry] = []
        self._lock = threading.Lock()

    def record(self, entry: UsageLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> List[UsageLogEntry]:
        with self._lock:
            return list(self._entries)


def record_safely(recorder: Optional[UsageRecorder], entry: UsageLogEntry) -> None:
    """Record an entry, logging and swallowing any recorder failure."""
    if recorder is None:
        return
    try:
        recorder.record(entry)
    except Exception as e:
        logger.warning(
            f"Failed to record usage for user={entry.user_id} op={entry.operation_type}: {e}"
        )
