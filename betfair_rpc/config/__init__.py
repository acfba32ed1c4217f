"""Configuration for the Betfair JSON-RPC client."""

from betfair_rpc.config.log_setup import configure_logging
from betfair_rpc.config.settings import BETTING_RPC_URL, Settings, get_settings

__all__ = ["BETTING_RPC_URL", "Settings", "configure_logging", "get_settings"]
