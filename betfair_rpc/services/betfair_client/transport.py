"""HTTP transport for Betfair JSON-RPC calls.

One blocking POST per call. No retries, no backoff and, unless
configured, no timeout.
"""

from typing import Any

import httpx
import structlog

from betfair_rpc.services.betfair_client.credentials import Credentials
from betfair_rpc.services.betfair_client.errors import BetfairResponseError

logger = structlog.get_logger(__name__)


class JsonRpcTransport:
    """Posts serialized JSON-RPC bodies to a fixed endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the transport.

        Args:
            url: JSON-RPC endpoint
            timeout: Seconds before giving up, None to wait indefinitely
            http_transport: Optional httpx transport (e.g. MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self._http_transport = http_transport

    def post(self, body: str, credentials: Credentials, ssl_verify: bool = True) -> Any:
        """
        Send a request body and return the decoded JSON reply.

        Args:
            body: Serialized JSON-RPC request
            credentials: App key and session token for the headers
            ssl_verify: Verify the server certificate

        Returns:
            Decoded JSON payload

        Raises:
            httpx.HTTPError: On network failure
            BetfairResponseError: If the body is not JSON
        """
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            **credentials.headers(),
        }

        try:
            with httpx.Client(
                verify=ssl_verify,
                timeout=self.timeout,
                transport=self._http_transport,
            ) as client:
                response = client.post(self.url, content=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("betfair_transport_error", url=self.url, error=str(e))
            raise

        try:
            return response.json()
        except ValueError:
            text = response.text or ""
            logger.error(
                "betfair_invalid_response",
                status_code=response.status_code,
                response_text=text[:500],
            )
            raise BetfairResponseError(
                f"Response is not JSON (HTTP {response.status_code}): {text[:200]}",
                status_code=response.status_code,
                body=text,
            )
