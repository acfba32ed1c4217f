"""Betfair Exchange JSON-RPC client.

Thin wrappers over the betting API returning pandas tables.
"""

from betfair_rpc.config import configure_logging, get_settings
from betfair_rpc.models import MarketFilter, PriceProjection, TimeRange
from betfair_rpc.services.betfair_client import (
    ApiResult,
    BetfairAPIError,
    BetfairClient,
    BetfairError,
    BetfairResponseError,
    Credentials,
)

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "BetfairAPIError",
    "BetfairClient",
    "BetfairError",
    "BetfairResponseError",
    "Credentials",
    "MarketFilter",
    "PriceProjection",
    "TimeRange",
    "configure_logging",
    "get_settings",
]
