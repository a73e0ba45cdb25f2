"""Forex news route — simulated economic calendar served from the freshness cache."""

import logging

from fastapi import APIRouter, Depends

from services.cache import EventCache, get_event_cache
from services.events import CalendarEvent

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/forex-news", response_model=list[CalendarEvent])
async def forex_news(cache: EventCache = Depends(get_event_cache)) -> list[CalendarEvent]:
    """Upcoming calendar events. Always 200: fresh, stale or mock data."""
    events = cache.get_events()
    logger.debug("Serving %d events (cache %s)", len(events), cache.state().value)
    return events
