"""Exceptions raised by the Betfair client."""

from typing import Any


class BetfairError(Exception):
    """Base class for Betfair client errors."""

    pass


class BetfairAPIError(BetfairError):
    """Betfair returned a JSON-RPC error payload."""

    def __init__(self, message: str, error_code: str | None = None, payload: Any = None):
        super().__init__(message)
        self.error_code = error_code
        self.payload = payload

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.args[0]} ({self.error_code})"
        return self.args[0]


class BetfairResponseError(BetfairError):
    """Response body could not be read as a JSON-RPC reply."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
