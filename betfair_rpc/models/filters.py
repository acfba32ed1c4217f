"""Request filters and projections for the Betfair betting API."""

from datetime import datetime, timedelta, timezone

from pydantic import Field, field_validator

from betfair_rpc.models.base import BetfairModel

# Betfair timestamps are UTC with a literal Z suffix
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

DEFAULT_HOURS_BEFORE = 2
DEFAULT_HOURS_AFTER = 24


def format_timestamp(value: datetime | str | None) -> str | None:
    """Format a datetime for the API, passing strings through untouched."""
    if value is None or isinstance(value, str):
        return value
    # Naive datetimes are taken as local time, like datetime.now()
    value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


class TimeRange(BetfairModel):
    """A from/to window. Either bound may be left open."""

    from_: str | None = Field(default=None, alias="from")
    to: str | None = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def _format_bound(cls, value):
        return format_timestamp(value)


def default_market_start_time(
    from_date: datetime | str | None = None,
    to_date: datetime | str | None = None,
    hours_before: float = DEFAULT_HOURS_BEFORE,
    hours_after: float = DEFAULT_HOURS_AFTER,
    now: datetime | None = None,
) -> TimeRange:
    """
    Build the market start window, filling missing bounds from the clock.

    Each bound defaults independently: from_date to now minus
    hours_before, to_date to now plus hours_after.

    Args:
        from_date: Explicit lower bound
        to_date: Explicit upper bound
        hours_before: Offset for the default lower bound
        hours_after: Offset for the default upper bound
        now: Reference time, defaults to the current UTC time

    Returns:
        TimeRange with both bounds set
    """
    now = now or datetime.now(timezone.utc)
    if from_date is None:
        from_date = now - timedelta(hours=hours_before)
    if to_date is None:
        to_date = now + timedelta(hours=hours_after)
    return TimeRange(from_=from_date, to=to_date)


class MarketFilter(BetfairModel):
    """Criteria restricting which entities a listing operation returns."""

    text_query: str | None = None
    exchange_ids: list[str] | None = None
    event_type_ids: list[str] | None = None
    event_ids: list[str] | None = None
    competition_ids: list[str] | None = None
    market_ids: list[str] | None = None
    venues: list[str] | None = None
    bsp_only: bool | None = None
    turn_in_play_enabled: bool | None = None
    in_play_only: bool | None = None
    market_betting_types: list[str] | None = None
    market_countries: list[str] | None = None
    market_type_codes: list[str] | None = None
    market_start_time: TimeRange | None = None
    with_orders: list[str] | None = None

    @field_validator(
        "exchange_ids",
        "event_type_ids",
        "event_ids",
        "competition_ids",
        "market_ids",
        "venues",
        "market_betting_types",
        "market_countries",
        "market_type_codes",
        "with_orders",
        mode="before",
    )
    @classmethod
    def _wrap_single_value(cls, value):
        # A lone id or status such as "EXECUTABLE" is still sent as a list
        if isinstance(value, (str, int)):
            return [value]
        return value


class ExBestOffersOverrides(BetfairModel):
    """Depth and rollup options for EX_BEST_OFFERS."""

    best_prices_depth: int | None = None
    rollup_model: str | None = None
    rollup_limit: int | None = None
    rollup_liability_threshold: float | None = None
    rollup_liability_factor: int | None = None


class PriceProjection(BetfairModel):
    """Which price data listMarketBook should return."""

    price_data: list[str] | None = None
    ex_best_offers_overrides: ExBestOffersOverrides | None = None
    virtualise: bool | None = None
    rollover_stakes: bool | None = None
