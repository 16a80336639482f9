"""Quota Module - Local per-user call budgets."""
from core.quota.tracker import (
    DEFAULT_LIMITS,
    JOB_ANALYSIS,
    RESUME_PARSE,
    SUMMARIZE_NOTES,
    Admission,
    Admitted,
    QuotaTracker,
    QuotaWindow,
    Rejected,
)

__all__ = [
    'DEFAULT_LIMITS',
    'JOB_ANALYSIS',
    'RESUME_PARSE',
    'SUMMARIZE_NOTES',
    'Admission',
    'Admitted',
    'QuotaTracker',
    'QuotaWindow',
    'Rejected',
]
