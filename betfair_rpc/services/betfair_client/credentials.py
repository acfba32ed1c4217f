"""Application key and session token for Betfair requests.

Login is done elsewhere; it leaves the key and token in the
environment as `product` and `token`.
"""

from dataclasses import dataclass

from betfair_rpc.config.settings import Settings


@dataclass(frozen=True)
class Credentials:
    """Header credentials sent with every request."""

    app_key: str
    session_token: str

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read credentials from the environment as it is right now."""
        # Fresh Settings rather than the cached one: login may run after import
        settings = Settings()
        return cls(
            app_key=settings.betfair_app_key,
            session_token=settings.betfair_session_token,
        )

    def headers(self) -> dict[str, str]:
        return {
            "X-Application": self.app_key,
            "X-Authentication": self.session_token,
        }

    def __repr__(self) -> str:
        return f"Credentials(app_key={self.app_key!r}, session_token='***')"
