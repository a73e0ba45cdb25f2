"""In-memory freshness cache for the forex news feed. No Redis needed.

Holds the last generated batch for a fixed TTL. On a miss the batch is
regenerated; if that fails the cache serves the stale batch, or the mock
set when nothing was ever generated. Callers always get data back.

Note: Each uvicorn worker has its own cache instance, so with --workers 2
each worker generates its own batch. Within a worker the check-generate-store
sequence runs under a lock, so concurrent stale reads regenerate once.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from enum import Enum

from services.events import MOCK_EVENTS, CalendarEvent, generate_events

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)
DEFAULT_BATCH_SIZE = 20


class CacheState(Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventCache:
    def __init__(
        self,
        generator: Callable[..., list[CalendarEvent]] = generate_events,
        ttl: timedelta = DEFAULT_TTL,
        batch_size: int = DEFAULT_BATCH_SIZE,
        fallback: Sequence[CalendarEvent] = MOCK_EVENTS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._generator = generator
        self._ttl = ttl
        self._batch_size = batch_size
        self._fallback = tuple(fallback)
        self._clock = clock
        self._lock = threading.Lock()
        # Set and cleared together
        self._batch: tuple[CalendarEvent, ...] | None = None
        self._created_at: datetime | None = None

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    def state(self, now: datetime | None = None) -> CacheState:
        if self._batch is None:
            return CacheState.EMPTY
        now = now or self._clock()
        if now - self._created_at < self._ttl:
            return CacheState.FRESH
        return CacheState.STALE

    def get_events(self, now: datetime | None = None) -> list[CalendarEvent]:
        """Return fresh, regenerated, stale or fallback events, in that order of preference."""
        now = now or self._clock()
        with self._lock:
            if self.state(now) is CacheState.FRESH:
                logger.info("Returning cached news data")
                return list(self._batch)

            logger.info("Generating new forex news data...")
            try:
                events = self._generator(self._batch_size, now=now)
            except Exception:
                logger.exception("Error generating forex news")
                if self._batch is not None:
                    logger.warning("Returning expired cached data due to error")
                    return list(self._batch)
                logger.warning("No cached data, falling back to mock data")
                return list(self._fallback)

            self._batch = tuple(events)
            self._created_at = now
            logger.info("Successfully generated %d news items", len(events))
            return list(self._batch)

    def clear(self) -> None:
        with self._lock:
            self._batch = None
            self._created_at = None


event_cache = EventCache()


def get_event_cache() -> EventCache:
    """FastAPI dependency for the process-wide cache (override in tests)."""
    return event_cache
