"""Synthetic forex economic-calendar events.

There is no upstream calendar feed: events are generated on demand, one per
hour starting from "now", with random pairs, impacts, indicators and values.
"""

import math
import random
from datetime import date as Date
from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from errors import EventGenerationError

CURRENCY_PAIRS = ("EUR/USD", "USD/JPY", "GBP/USD", "AUD/USD", "USD/CAD")

EVENT_NAMES = (
    "Interest Rate Decision",
    "Non-Farm Payrolls",
    "GDP",
    "CPI",
    "Retail Sales",
    "PMI",
    "Trade Balance",
    "Unemployment Rate",
)

# Upper bound (exclusive) for generated forecast/previous percentages
MAX_PERCENT = 5


class Impact(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


IMPACTS = tuple(Impact)


class CalendarEvent(BaseModel):
    """One calendar row. Serialized with the short JSON names (currency, event, ...)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: Date
    time: str
    currency_pair: str = Field(alias="currency")
    impact: Impact
    event_name: str = Field(alias="event")
    forecast_value: str = Field(alias="forecast")
    previous_value: str = Field(alias="previous")


def _local(moment: datetime) -> datetime:
    """Convert to the host's local timezone (naive values are taken as local)."""
    return moment.astimezone()


def utc_date(moment: datetime) -> Date:
    """Calendar date in UTC; the clock time stays local."""
    return moment.astimezone(timezone.utc).date()


def format_clock(moment: datetime) -> str:
    """12-hour clock without a leading zero, e.g. '3:04:05 PM'."""
    return moment.strftime("%I:%M:%S %p").lstrip("0")


def format_percent(value: float) -> str:
    # Truncate rather than round so 4.999 never becomes '5.00%'
    return f"{math.floor(value * 100) / 100:.2f}%"


def generate_events(
    count: int,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[CalendarEvent]:
    """Generate `count` hourly events starting at `now`.

    Args:
        count: Number of events to produce.
        now: Reference time; defaults to the current UTC time.
        rng: Random source; defaults to the module-level generator.
            Pass a seeded ``random.Random`` for reproducible output.

    Raises:
        EventGenerationError: If count is negative.
    """
    if count < 0:
        raise EventGenerationError(count)

    now = now or datetime.now(timezone.utc)
    rng = rng or random

    events = []
    for i in range(count):
        moment = now + timedelta(hours=i)
        events.append(
            CalendarEvent(
                date=utc_date(moment),
                time=format_clock(_local(moment)),
                currency_pair=rng.choice(CURRENCY_PAIRS),
                impact=rng.choice(IMPACTS),
                event_name=rng.choice(EVENT_NAMES),
                forecast_value=format_percent(rng.random() * MAX_PERCENT),
                previous_value=format_percent(rng.random() * MAX_PERCENT),
            )
        )
    return events


def _build_mock_events(now: datetime) -> tuple[CalendarEvent, ...]:
    """Fixed fallback set, used only when generation fails with nothing cached."""
    today = utc_date(now)
    rows = [
        (0, "EUR/USD", Impact.HIGH, "ECB Interest Rate Decision", "4.50%", "4.50%"),
        (1, "USD/JPY", Impact.MEDIUM, "US Non-Farm Payrolls", "200K", "175K"),
        (2, "GBP/USD", Impact.LOW, "UK GDP", "0.2%", "0.1%"),
    ]
    return tuple(
        CalendarEvent(
            date=today,
            time=format_clock(_local(now + timedelta(hours=offset))),
            currency_pair=pair,
            impact=impact,
            event_name=name,
            forecast_value=forecast,
            previous_value=previous,
        )
        for offset, pair, impact, name, forecast, previous in rows
    )


MOCK_EVENTS = _build_mock_events(datetime.now(timezone.utc))
