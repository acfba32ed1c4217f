"""Betfair Exchange betting API client.

Provides synchronous access to Betfair's JSON-RPC betting API with:
- Filters built from keyword criteria, unset fields omitted
- Default market start window for listing operations
- Uniform tabular results for both success and error replies
"""

from datetime import datetime
from typing import Any, Iterable

import structlog

from betfair_rpc.config.settings import Settings, get_settings
from betfair_rpc.models.base import BetfairModel
from betfair_rpc.models.envelope import JsonRpcRequest, rpc_method
from betfair_rpc.models.filters import (
    DEFAULT_HOURS_AFTER,
    DEFAULT_HOURS_BEFORE,
    MarketFilter,
    TimeRange,
    default_market_start_time,
    format_timestamp,
)
from betfair_rpc.services.betfair_client.credentials import Credentials
from betfair_rpc.services.betfair_client.response import ApiResult, map_response
from betfair_rpc.services.betfair_client.transport import JsonRpcTransport

logger = structlog.get_logger(__name__)

DateLike = datetime | str | None


def _as_list(value: Any) -> list[Any] | None:
    """Normalize an id or iterable of ids to a list, preserving order."""
    if value is None:
        return None
    if isinstance(value, (str, int)):
        return [value]
    return list(value)


def _as_ids(value: Any) -> list[str] | None:
    """Like _as_list, with numeric ids sent as strings as the API expects."""
    values = _as_list(value)
    if values is None:
        return None
    return [str(item) if isinstance(item, int) else item for item in values]


def _dump(value: Any) -> Any:
    if isinstance(value, BetfairModel):
        return value.to_params()
    return value


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    """Drop unset parameters and serialize nested models."""
    return {key: _dump(value) for key, value in params.items() if value is not None}


def _date_range(date_from: DateLike, date_to: DateLike) -> dict[str, Any] | None:
    if date_from is None and date_to is None:
        return None
    return TimeRange(from_=date_from, to=date_to).to_params()


class BetfairClient:
    """
    Betfair Exchange betting API client.

    Every operation returns an ApiResult. Remote errors come back as an
    error-variant result; network errors propagate.

    Every operation also accepts:
        suppress: Skip the warning log when Betfair returns an error
        ssl_verify: Override certificate verification for this call
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        settings: Settings | None = None,
        transport: JsonRpcTransport | None = None,
    ):
        """
        Initialize Betfair client.

        Args:
            credentials: App key and session token. When omitted they are
                read from the environment on every call.
            settings: Optional settings, defaults to get_settings()
            transport: Optional custom transport
        """
        self.settings = settings or get_settings()
        self.credentials = credentials
        self.transport = transport or JsonRpcTransport(
            self.settings.betfair_betting_url,
            timeout=self.settings.betfair_request_timeout,
        )

        defaults = self.settings.load_defaults_config()
        rpc = defaults.get("jsonrpc", {})
        self.namespace = rpc.get("namespace", "SportsAPING")
        self.version = rpc.get("version", "v1.0")
        self.request_id = str(rpc.get("request_id", "1"))

        window = defaults.get("market_start_window", {})
        self.hours_before = window.get("hours_before", DEFAULT_HOURS_BEFORE)
        self.hours_after = window.get("hours_after", DEFAULT_HOURS_AFTER)

    def build_request(self, operation: str, params: dict[str, Any]) -> JsonRpcRequest:
        """Wrap params in the JSON-RPC envelope for an operation."""
        return JsonRpcRequest(
            method=rpc_method(operation, self.namespace, self.version),
            params=params,
            id=self.request_id,
        )

    def market_filter(
        self,
        from_date: DateLike = None,
        to_date: DateLike = None,
        **criteria: Any,
    ) -> MarketFilter:
        """
        Build a listing filter with the market start window filled in.

        Args:
            from_date: Earliest market start, defaults to now minus 2h
            to_date: Latest market start, defaults to now plus 24h
            **criteria: Any MarketFilter field, e.g. event_type_ids=["1"]. A
                market_start_time given here replaces the default window.

        Returns:
            MarketFilter with marketStartTime always set
        """
        window = criteria.pop("market_start_time", None)
        camel_window = criteria.pop("marketStartTime", None)
        if window is None:
            window = camel_window
        if window is None:
            window = default_market_start_time(
                from_date,
                to_date,
                hours_before=self.hours_before,
                hours_after=self.hours_after,
            )
        else:
            # An explicit window is sent as given; from_date/to_date override its bounds
            window = TimeRange.model_validate(window) if isinstance(window, dict) else window
            window = TimeRange(
                from_=window.from_ if from_date is None else from_date,
                to=window.to if to_date is None else to_date,
            )
        return MarketFilter(market_start_time=window, **criteria)

    def _request(
        self,
        operation: str,
        params: dict[str, Any],
        suppress: bool = False,
        ssl_verify: bool | None = None,
        record_path: str | None = None,
    ) -> ApiResult:
        """
        Make an API request.

        Args:
            operation: API operation name, e.g. listCompetitions
            params: Request parameters
            suppress: Skip the warning log on an error reply
            ssl_verify: Certificate verification, defaults to settings
            record_path: Key of the record list inside a wrapper result

        Returns:
            ApiResult for the reply
        """
        request = self.build_request(operation, params)
        credentials = self.credentials or Credentials.from_env()
        verify = self.settings.betfair_ssl_verify if ssl_verify is None else ssl_verify

        logger.debug("betfair_request", method=request.method, ssl_verify=verify)
        payload = self.transport.post(request.to_json(), credentials, ssl_verify=verify)

        return map_response(payload, request.method, suppress=suppress, record_path=record_path)

    def _list_by_filter(
        self,
        operation: str,
        from_date: DateLike,
        to_date: DateLike,
        criteria: dict[str, Any],
        extra: dict[str, Any] | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
    ) -> ApiResult:
        market_filter = self.market_filter(from_date, to_date, **criteria)
        params = {"filter": market_filter.to_params(), **_compact(extra or {})}
        return self._request(operation, params, suppress=suppress, ssl_verify=ssl_verify)

    def list_event_types(
        self,
        from_date: DateLike = None,
        to_date: DateLike = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """List sports (event types) with markets matching the filter."""
        return self._list_by_filter(
            "listEventTypes",
            from_date,
            to_date,
            criteria,
            {"locale": locale},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_competitions(
        self,
        event_type_ids: Iterable[str] | str,
        market_type_codes: Iterable[str] | None = None,
        from_date: DateLike = None,
        to_date: DateLike = None,
        event_ids: Iterable[str] | None = None,
        competition_ids: Iterable[str] | None = None,
        market_ids: Iterable[str] | None = None,
        market_countries: Iterable[str] | None = None,
        venues: Iterable[str] | None = None,
        bsp_only: bool | None = None,
        turn_in_play_enabled: bool | None = None,
        in_play_only: bool | None = None,
        market_betting_types: Iterable[str] | None = None,
        with_orders: Iterable[str] | str | None = None,
        text_query: str | None = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
    ) -> ApiResult:
        """
        List competitions with markets matching the filter.

        Useful for finding competition ids (e.g. EPL = "31") to pass on to
        other listings. Limited to markets starting in the next 24 hours
        unless from_date/to_date say otherwise.

        Args:
            event_type_ids: Sports to restrict to (Football = "1")
            market_type_codes: e.g. ["MATCH_ODDS"]
            from_date: Earliest market start, defaults to now minus 2h
            to_date: Latest market start, defaults to now plus 24h
            event_ids: Restrict to these events
            competition_ids: Restrict to these competitions
            market_ids: Restrict to these markets
            market_countries: ISO country codes
            venues: Horse racing venues
            bsp_only: BSP markets only (True) or non-BSP only (False)
            turn_in_play_enabled: Markets that will (or won't) go in play
            in_play_only: Markets currently in play (or not)
            market_betting_types: e.g. ["ODDS", "ASIAN_HANDICAP_SINGLE_LINE"]
            with_orders: EXECUTION_COMPLETE and/or EXECUTABLE
            text_query: Free text, may contain a non-leading wildcard
            locale: Language for names

        Returns:
            ApiResult with competition.id, competition.name, marketCount
            and competitionRegion columns
        """
        criteria = {
            "event_type_ids": event_type_ids,
            "market_type_codes": market_type_codes,
            "event_ids": event_ids,
            "competition_ids": competition_ids,
            "market_ids": market_ids,
            "market_countries": market_countries,
            "venues": venues,
            "bsp_only": bsp_only,
            "turn_in_play_enabled": turn_in_play_enabled,
            "in_play_only": in_play_only,
            "market_betting_types": market_betting_types,
            "with_orders": with_orders,
            "text_query": text_query,
        }
        return self._list_by_filter(
            "listCompetitions",
            from_date,
            to_date,
            criteria,
            {"locale": locale},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_time_ranges(
        self,
        granularity: str = "DAYS",
        from_date: DateLike = None,
        to_date: DateLike = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """List time ranges (DAYS, HOURS or MINUTES) holding matching markets."""
        return self._list_by_filter(
            "listTimeRanges",
            from_date,
            to_date,
            criteria,
            {"granularity": granularity},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_events(
        self,
        from_date: DateLike = None,
        to_date: DateLike = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """List events (matches, races) with markets matching the filter."""
        return self._list_by_filter(
            "listEvents",
            from_date,
            to_date,
            criteria,
            {"locale": locale},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_market_types(
        self,
        from_date: DateLike = None,
        to_date: DateLike = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """List market type codes (MATCH_ODDS, ...) matching the filter."""
        return self._list_by_filter(
            "listMarketTypes",
            from_date,
            to_date,
            criteria,
            {"locale": locale},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_countries(
        self,
        from_date: DateLike = None,
        to_date: DateLike = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """List country codes with markets matching the filter."""
        return self._list_by_filter(
            "listCountries",
            from_date,
            to_date,
            criteria,
            {"locale": locale},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_venues(
        self,
        from_date: DateLike = None,
        to_date: DateLike = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """List venues. Only horse racing markets carry a venue."""
        return self._list_by_filter(
            "listVenues",
            from_date,
            to_date,
            criteria,
            {"locale": locale},
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_market_catalogue(
        self,
        max_results: int = 1000,
        market_projection: Iterable[str] | None = None,
        sort: str | None = None,
        from_date: DateLike = None,
        to_date: DateLike = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
        **criteria: Any,
    ) -> ApiResult:
        """
        Fetch market metadata.

        Args:
            max_results: Upper bound on markets returned (Betfair caps at 1000)
            market_projection: e.g. ["EVENT", "COMPETITION", "RUNNER_DESCRIPTION"]
            sort: e.g. FIRST_TO_START, MAXIMUM_TRADED
            from_date: Earliest market start, defaults to now minus 2h
            to_date: Latest market start, defaults to now plus 24h
            locale: Language for names
            **criteria: MarketFilter fields

        Returns:
            ApiResult with one row per market
        """
        return self._list_by_filter(
            "listMarketCatalogue",
            from_date,
            to_date,
            criteria,
            {
                "marketProjection": _as_list(market_projection),
                "sort": sort,
                "maxResults": max_results,
                "locale": locale,
            },
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_market_book(
        self,
        market_ids: Iterable[str] | str,
        price_projection: Any = None,
        order_projection: str | None = None,
        match_projection: str | None = None,
        include_overall_position: bool | None = None,
        partition_matched_by_strategy_ref: bool | None = None,
        customer_strategy_refs: Iterable[str] | None = None,
        currency_code: str | None = None,
        matched_since: DateLike = None,
        bet_ids: Iterable[str] | None = None,
        locale: str | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
    ) -> ApiResult:
        """
        Fetch live prices and state for markets.

        Args:
            market_ids: Market ids, e.g. ["1.122958246"]
            price_projection: PriceProjection (or equivalent dict)
            order_projection: ALL, EXECUTABLE or EXECUTION_COMPLETE
            match_projection: NO_ROLLUP, ROLLED_UP_BY_PRICE or ROLLED_UP_BY_AVG_PRICE
            include_overall_position: Include own matched position
            partition_matched_by_strategy_ref: Split matches by strategy ref
            customer_strategy_refs: Only orders with these strategy refs
            currency_code: Currency for prices and sizes
            matched_since: Only orders with matches since this time
            bet_ids: Only these bets
            locale: Language for names

        Returns:
            ApiResult with one row per market; runners stay nested
        """
        params = {
            "marketIds": _as_ids(market_ids),
            "priceProjection": price_projection,
            "orderProjection": order_projection,
            "matchProjection": match_projection,
            "includeOverallPosition": include_overall_position,
            "partitionMatchedByStrategyRef": partition_matched_by_strategy_ref,
            "customerStrategyRefs": _as_list(customer_strategy_refs),
            "currencyCode": currency_code,
            "matchedSince": format_timestamp(matched_since),
            "betIds": _as_ids(bet_ids),
            "locale": locale,
        }
        return self._request(
            "listMarketBook", _compact(params), suppress=suppress, ssl_verify=ssl_verify
        )

    def list_market_pandl(
        self,
        market_ids: Iterable[str] | str,
        include_settled_bets: bool | None = None,
        include_bsp_bets: bool | None = None,
        net_of_commission: bool | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
    ) -> ApiResult:
        """
        Retrieve profit and loss for OPEN markets.

        Values are what each selection winning would pay out, from matched
        (and optionally settled) bets. Use list_cleared_orders for
        closed markets.

        Args:
            market_ids: Markets to report on
            include_settled_bets: Include settled bets (partially settled
                markets only). Betfair treats unset as False.
            include_bsp_bets: Include BSP bets. Unset means False.
            net_of_commission: Net of the current commission rate. Unset
                means False.

        Returns:
            ApiResult with marketId and nested profitAndLosses per market
        """
        params = {
            "marketIds": _as_ids(market_ids),
            "includeSettledBets": include_settled_bets,
            "includeBspBets": include_bsp_bets,
            "netOfCommission": net_of_commission,
        }
        return self._request(
            "listMarketProfitAndLoss",
            _compact(params),
            suppress=suppress,
            ssl_verify=ssl_verify,
        )

    def list_current_orders(
        self,
        bet_ids: Iterable[str] | None = None,
        market_ids: Iterable[str] | None = None,
        order_projection: str | None = None,
        date_from: DateLike = None,
        date_to: DateLike = None,
        order_by: str | None = None,
        sort_dir: str | None = None,
        from_record: int | None = None,
        record_count: int | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
    ) -> ApiResult:
        """
        List the account's current (unsettled) orders.

        Args:
            bet_ids: Only these bets
            market_ids: Only bets in these markets
            order_projection: ALL, EXECUTABLE or EXECUTION_COMPLETE
            date_from: Placed on or after
            date_to: Placed on or before
            order_by: BY_BET, BY_MARKET, BY_MATCH_TIME or BY_PLACE_TIME
            sort_dir: EARLIEST_TO_LATEST or LATEST_TO_EARLIEST
            from_record: Paging offset
            record_count: Page size

        Returns:
            ApiResult with one row per order; moreAvailable in meta
        """
        params = {
            "betIds": _as_ids(bet_ids),
            "marketIds": _as_ids(market_ids),
            "orderProjection": order_projection,
            "placedDateRange": _date_range(date_from, date_to),
            "orderBy": order_by,
            "sortDir": sort_dir,
            "fromRecord": from_record,
            "recordCount": record_count,
        }
        return self._request(
            "listCurrentOrders",
            _compact(params),
            suppress=suppress,
            ssl_verify=ssl_verify,
            record_path="currentOrders",
        )

    def list_cleared_orders(
        self,
        bet_status: str,
        event_type_ids: Iterable[str] | None = None,
        event_ids: Iterable[str] | None = None,
        market_ids: Iterable[str] | None = None,
        runner_ids: Iterable[int] | None = None,
        bet_ids: Iterable[str] | None = None,
        side: str | None = None,
        settled_from: DateLike = None,
        settled_to: DateLike = None,
        group_by: str | None = None,
        include_item_description: bool = True,
        locale: str | None = None,
        from_record: int | None = None,
        record_count: int | None = None,
        suppress: bool = False,
        ssl_verify: bool | None = None,
    ) -> ApiResult:
        """
        List settled orders, optionally rolled up.

        Args:
            bet_status: SETTLED, VOIDED, LAPSED or CANCELLED
            event_type_ids: Only these sports
            event_ids: Only these events
            market_ids: Only these markets
            runner_ids: Only these selections
            bet_ids: Only these bets
            side: BACK or LAY
            settled_from: Settled on or after
            settled_to: Settled on or before
            group_by: Roll up by EVENT_TYPE, EVENT, MARKET, SIDE or BET
            include_item_description: Always sent; adds event/market names
            locale: Language for item descriptions
            from_record: Paging offset
            record_count: Page size

        Returns:
            ApiResult with one row per cleared order; moreAvailable in meta
        """
        params = {
            "betStatus": bet_status,
            "eventTypeIds": _as_ids(event_type_ids),
            "eventIds": _as_ids(event_ids),
            "marketIds": _as_ids(market_ids),
            "runnerIds": _as_list(runner_ids),
            "betIds": _as_ids(bet_ids),
            "side": side,
            "settledDateRange": _date_range(settled_from, settled_to),
            "groupBy": group_by,
            "includeItemDescription": bool(include_item_description),
            "locale": locale,
            "fromRecord": from_record,
            "recordCount": record_count,
        }
        return self._request(
            "listClearedOrders",
            _compact(params),
            suppress=suppress,
            ssl_verify=ssl_verify,
            record_path="clearedOrders",
        )
