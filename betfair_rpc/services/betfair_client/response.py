"""Map JSON-RPC replies onto tables.

Success and failure both come back as an ApiResult holding a DataFrame,
so callers can inspect either the same way.
"""

from dataclasses import dataclass, field
from typing import Any

import pandas as pd
import structlog

from betfair_rpc.services.betfair_client.errors import BetfairAPIError, BetfairResponseError

logger = structlog.get_logger(__name__)


@dataclass
class ApiResult:
    """Outcome of one API call: a result table or an error table."""

    method: str
    table: pd.DataFrame
    error: dict[str, Any] | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> str | None:
        """Betfair's error code, e.g. INVALID_SESSION_INFORMATION."""
        if self.error is None:
            return None
        data = self.error.get("data")
        if isinstance(data, dict):
            name = data.get("exceptionname")
            detail = data.get(name) if name else None
            if isinstance(detail, dict) and detail.get("errorCode"):
                return detail["errorCode"]
        message = self.error.get("message")
        return str(message) if message is not None else None

    def raise_for_error(self) -> "ApiResult":
        """Raise BetfairAPIError for an error result, else return self."""
        if self.error is not None:
            message = self.error.get("message") or "Betfair API error"
            raise BetfairAPIError(f"{self.method}: {message}", self.error_code, self.error)
        return self


def to_table(result: Any, record_path: str | None = None) -> tuple[pd.DataFrame, dict[str, Any]]:
    """
    Flatten a result payload into a table.

    Args:
        result: The decoded `result` value
        record_path: Key holding the record list when the result is a
            wrapper object (e.g. "currentOrders")

    Returns:
        (table, meta) where meta holds the wrapper's other keys
    """
    meta: dict[str, Any] = {}

    if result is None:
        return pd.DataFrame(), meta

    if isinstance(result, dict) and record_path is not None:
        meta = {k: v for k, v in result.items() if k != record_path}
        result = result.get(record_path) or []

    if isinstance(result, dict):
        records = [result]
    elif isinstance(result, list):
        records = result
    else:
        return pd.DataFrame({"result": [result]}), meta

    if not records:
        return pd.DataFrame(), meta
    if not all(isinstance(record, dict) for record in records):
        # Plain values (e.g. market type codes as strings) go in one column
        return pd.DataFrame({"result": records}), meta
    return pd.json_normalize(records), meta


def map_response(
    payload: Any,
    method: str,
    suppress: bool = False,
    record_path: str | None = None,
) -> ApiResult:
    """
    Turn a decoded JSON-RPC reply into an ApiResult.

    Args:
        payload: Decoded response body
        method: Qualified JSON-RPC method, for context
        suppress: Skip the warning log on an error reply
        record_path: See to_table

    Returns:
        ApiResult, error variant if the reply carries `error`

    Raises:
        BetfairResponseError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise BetfairResponseError(
            f"Expected a JSON-RPC object from {method}, got {type(payload).__name__}"
        )

    error = payload.get("error")
    if error is not None:
        if not isinstance(error, dict):
            error = {"message": error}
        result = ApiResult(method=method, table=pd.json_normalize(error), error=error)
        if not suppress:
            logger.warning(
                "betfair_api_error",
                method=method,
                error_code=result.error_code,
                message=error.get("message"),
            )
        return result

    table, meta = to_table(payload.get("result"), record_path)
    return ApiResult(method=method, table=table, meta=meta)
