#!/usr/bin/env python3
"""
Quota endpoints - remaining hourly budget per operation type.
"""

import math
from fastapi import APIRouter, Depends

from core.quota.tracker import QuotaTracker
from ..dependencies import get_quota_tracker, get_user_id
from ..models.responses import OperationQuota, QuotaResponse

router = APIRouter(prefix="/api/quota", tags=["quota"])


@router.get("", response_model=QuotaResponse)
def get_quota(
    user_id: str = Depends(get_user_id),
    tracker: QuotaTracker = Depends(get_quota_tracker)
):
    """Report the caller's usage in the current window for every operation type."""
    now = tracker.now()
    quota = {}
    for operation_type in sorted(tracker.limits):
        limit = tracker.limits[operation_type]
        window = tracker.window(user_id, operation_type)
        used = window.count if window else 0
        resets_in = None
        if window is not None:
            resets_in = max(0, int(math.ceil(window.window_start + tracker.window_seconds - now)))
        quota[operation_type] = OperationQuota(
            limit=limit,
            used=used,
            remaining=max(0, limit - used),
            window_resets_in_seconds=resets_in
        )

    return QuotaResponse(success=True, user_id=user_id, quota=quota)
