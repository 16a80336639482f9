"""Usage Module - Audit log of reasoning service calls."""
from core.usage.recorder import (
    InMemoryUsageRecorder,
    UsageLogEntry,
    UsageRecorder,
    estimate_cost,
    record_safely,
)

__all__ = [
    'InMemoryUsageRecorder',
    'UsageLogEntry',
    'UsageRecorder',
    'estimate_cost',
    'record_safely',
]
