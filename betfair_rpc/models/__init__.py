"""Request models for the Betfair JSON-RPC client."""

from betfair_rpc.models.envelope import JsonRpcRequest, rpc_method
from betfair_rpc.models.filters import (
    TIMESTAMP_FORMAT,
    ExBestOffersOverrides,
    MarketFilter,
    PriceProjection,
    TimeRange,
    default_market_start_time,
    format_timestamp,
)

__all__ = [
    "TIMESTAMP_FORMAT",
    "ExBestOffersOverrides",
    "JsonRpcRequest",
    "MarketFilter",
    "PriceProjection",
    "TimeRange",
    "default_market_start_time",
    "format_timestamp",
    "rpc_method",
]
