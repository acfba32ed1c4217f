"""Betfair API client module."""

from betfair_rpc.services.betfair_client.api import BetfairClient
from betfair_rpc.services.betfair_client.credentials import Credentials
from betfair_rpc.services.betfair_client.errors import (
    BetfairAPIError,
    BetfairError,
    BetfairResponseError,
)
from betfair_rpc.services.betfair_client.response import ApiResult, map_response
from betfair_rpc.services.betfair_client.transport import JsonRpcTransport

__all__ = [
    "ApiResult",
    "BetfairAPIError",
    "BetfairClient",
    "BetfairError",
    "BetfairResponseError",
    "Credentials",
    "JsonRpcTransport",
    "map_response",
]
