"""Client settings and configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BETTING_RPC_URL = "https://api.betfair.com/exchange/betting/json-rpc/v1"


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Betfair API
    betfair_betting_url: str = Field(
        default=BETTING_RPC_URL,
        description="Betting JSON-RPC endpoint",
    )
    # The login step exports these as `product` and `token`
    betfair_app_key: str = Field(
        default="",
        validation_alias=AliasChoices("product", "betfair_app_key"),
        description="Betfair application key",
    )
    betfair_session_token: str = Field(
        default="",
        validation_alias=AliasChoices("token", "betfair_session_token"),
        description="Betfair session token",
    )
    betfair_ssl_verify: bool = Field(
        default=True, description="Verify the exchange's SSL certificate"
    )
    betfair_request_timeout: float | None = Field(
        default=None, description="HTTP timeout in seconds (None waits forever)"
    )

    # Application
    log_level: str = Field(default="INFO", description="Logging level")

    # Paths
    config_path: Path = Field(
        default=Path(__file__).parent / "defaults.yaml",
        description="Path to defaults.yaml configuration",
    )

    @property
    def betfair_configured(self) -> bool:
        """Check if Betfair credentials are present."""
        return bool(self.betfair_app_key and self.betfair_session_token)

    def load_defaults_config(self) -> dict[str, Any]:
        """Load the defaults.yaml configuration file."""
        if self.config_path.exists():
            with open(self.config_path) as f:
                return yaml.safe_load(f) or {}
        return {}


@lru_cache
def get_settings() -> Settings:
    """Get cached client settings."""
    return Settings()
