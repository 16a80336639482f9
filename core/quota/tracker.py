"""
Quota Tracker - Per-user, per-operation hourly call budgets.

Each (user_id, operation_type) key owns a fixed 60-minute window that starts
at the first admitted call. The window resets once the elapsed time since
window_start exceeds the window length. Admission increments the counter
under the key's lock, so concurrent requests from the same user can never
both take the last slot, while other users' keys are never blocked.
"""
import contextlib
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Tuple, Union

from core.errors import RateLimitError

logger = logging.getLogger(__name__)

RESUME_PARSE = "resume_parse"
JOB_ANALYSIS = "job_analysis"
SUMMARIZE_NOTES = "summarize_notes"

DEFAULT_LIMITS: Dict[str, int] = {
    RESUME_PARSE: 10,
    JOB_ANALYSIS: 10,
    SUMMARIZE_NOTES: 50,
}
WINDOW_SECONDS = 60 * 60


@dataclass
class QuotaWindow:
    count: int
    window_start: float


@dataclass(frozen=True)
class Admitted:
    """Proof that one call slot was consumed for this key."""
    user_id: str
    operation_type: str
    count: int
    limit: int
    window_start: float


@dataclass(frozen=True)
class Rejected:
    user_id: str
    operation_type: str
    limit: int
    retry_after_seconds: int

    def to_error(self) -> RateLimitError:
        minutes = max(1, int(math.ceil(self.retry_after_seconds / 60)))
        return RateLimitError(
            f"Rate limit exceeded for {self.operation_type}. Limit: {self.limit} per hour. "
            f"Try again in {minutes} minute{'s' if minutes != 1 else ''}.",
            operation_type=self.operation_type,
            limit=self.limit,
            retry_after_seconds=self.retry_after_seconds,
        )


Admission = Union[Admitted, Rejected]


class QuotaTracker:
    """
    In-process keyed quota store.

    The clock returns seconds as a float and is injectable for tests. Expired
    windows and their locks are evicted at most once per window length, so the
    store holds only keys active within roughly the last two windows.
    """

    def __init__(
        self,
        limits: Optional[Dict[str, int]] = None,
        window_seconds: int = WINDOW_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        self.limits = dict(DEFAULT_LIMITS if limits is None else limits)
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[Tuple[str, str], QuotaWindow] = {}
        self._locks: Dict[Tuple[str, str], threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._last_sweep = clock()

    def now(self) -> float:
        return self._clock()

    def _limit_for(self, operation_type: str) -> int:
        try:
            return self.limits[operation_type]
        except KeyError:
            raise ValueError(
                f"Unknown operation type '{operation_type}'. "
                f"Expected one of: {', '.join(sorted(self.limits))}"
            ) from None

    def _lock_for(self, key: Tuple[str, str]) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextlib.contextmanager
    def _key_lock(self, key: Tuple[str, str]) -> Iterator[None]:
        """Hold the key's registered lock.

        A lock evicted between lookup and acquisition is released and the
        lookup repeated, so two threads never guard one key with different locks.
        """
        while True:
            lock = self._lock_for(key)
            lock.acquire()
            with self._registry_lock:
                current = self._locks.get(key) is lock
            if current:
                break
            lock.release()
        try:
            yield
        finally:
            lock.release()

    def _sweep_expired(self, now: float) -> None:
        """Drop expired windows and their locks, at most once per window length.

        Keys whose lock is currently held are skipped and picked up by a later sweep.
        """
        with self._registry_lock:
            if now - self._last_sweep < self.window_seconds:
                return
            self._last_sweep = now
            evicted = 0
            for key, lock in list(self._locks.items()):
                if not lock.acquire(blocking=False):
                    continue
                try:
                    window = self._windows.get(key)
                    if window is None or now - window.window_start > self.window_seconds:
                        self._windows.pop(key, None)
                        del self._locks[key]
                        evicted += 1
                finally:
                    lock.release()
        if evicted:
            logger.debug(f"Evicted {evicted} expired quota windows")

    def _current_window(self, key: Tuple[str, str], now: float) -> Optional[QuotaWindow]:
        """Window for key, or None if there is none or it has expired. Caller holds the key lock."""
        window = self._windows.get(key)
        if window is None or now - window.window_start > self.window_seconds:
            return None
        return window

    def try_admit(self, user_id: str, operation_type: str) -> Admission:
        """Consume one slot for the key if the window has room.

        Returns Admitted with the post-increment count, or Rejected with the
        whole seconds left until the window resets (always at least 1).
        """
        limit = self._limit_for(operation_type)
        key = (str(user_id), operation_type)

        with self._key_lock(key):
            now = self._clock()
            admission = self._admit(key, limit, now)
        self._sweep_expired(now)
        return admission

    def _admit(self, key: Tuple[str, str], limit: int, now: float) -> Admission:
        """Count-and-check for one key. Caller holds the key lock."""
        user_id, operation_type = key
        window = self._current_window(key, now)
        if window is None:
            window = QuotaWindow(count=0, window_start=now)
            self._windows[key] = window

        if window.count >= limit:
            remaining = window.window_start + self.window_seconds - now
            retry_after = max(1, int(math.ceil(remaining)))
            logger.info(
                f"Quota exhausted for user={user_id} op={operation_type} "
                f"({window.count}/{limit}), retry in {retry_after}s"
            )
            return Rejected(
                user_id=user_id,
                operation_type=operation_type,
                limit=limit,
                retry_after_seconds=retry_after,
            )

        window.count += 1
        logger.debug(f"Admitted user={user_id} op={operation_type} ({window.count}/{limit})")
        return Admitted(
            user_id=user_id,
            operation_type=operation_type,
            count=window.count,
            limit=limit,
            window_start=window.window_start,
        )

    def remaining(self, user_id: str, operation_type: str) -> int:
        """Calls still available in the current window."""
        limit = self._limit_for(operation_type)
        key = (str(user_id), operation_type)
        with self._key_lock(key):
            window = self._current_window(key, self._clock())
            used = window.count if window else 0
        return max(0, limit - used)

    def window(self, user_id: str, operation_type: str) -> Optional[QuotaWindow]:
        """Snapshot of the key's live window, or None if no window is active."""
        self._limit_for(operation_type)
        key = (str(user_id), operation_type)
        with self._key_lock(key):
            window = self._current_window(key, self._clock())
            if window is None:
                return None
            return QuotaWindow(count=window.count, window_start=window.window_start)
