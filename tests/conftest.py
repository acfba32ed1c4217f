"""Pytest configuration and fixtures for betfair-rpc tests."""

import json

import httpx
import pytest

from betfair_rpc.config.settings import Settings
from betfair_rpc.services.betfair_client import BetfairClient, Credentials, JsonRpcTransport


class RecordingHandler:
    """httpx MockTransport handler that records requests and replies with a fixed payload."""

    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def credentials():
    """Explicit test credentials."""
    return Credentials(app_key="test-app-key", session_token="test-session-token")


@pytest.fixture
def settings():
    """Settings with library defaults, ignoring any local .env."""
    return Settings(_env_file=None)


@pytest.fixture
def make_client(credentials, settings):
    """Factory returning (client, handler) wired to a mock transport."""

    def _make(payload=None, status_code=200, text=None, with_credentials=True):
        if payload is None and text is None:
            payload = {"jsonrpc": "2.0", "result": [], "id": "1"}
        handler = RecordingHandler(payload, status_code=status_code, text=text)
        transport = JsonRpcTransport(
            settings.betfair_betting_url,
            http_transport=httpx.MockTransport(handler),
        )
        client = BetfairClient(
            credentials=credentials if with_credentials else None,
            settings=settings,
            transport=transport,
        )
        return client, handler

    return _make


@pytest.fixture
def competitions_payload():
    """listCompetitions reply for two football competitions."""
    return {
        "jsonrpc": "2.0",
        "result": [
            {
                "competition": {"id": "31", "name": "English Premier League"},
                "marketCount": 412,
                "competitionRegion": "GBR",
            },
            {
                "competition": {"id": "117", "name": "Spanish La Liga"},
                "marketCount": 233,
                "competitionRegion": "ESP",
            },
        ],
        "id": "1",
    }


@pytest.fixture
def error_payload():
    """JSON-RPC error reply for a missing session token."""
    return {
        "jsonrpc": "2.0",
        "error": {
            "code": -32099,
            "message": "ANGX-0003",
            "data": {
                "APINGException": {
                    "requestUUID": "prdang004-01011130-0012ab34",
                    "errorCode": "INVALID_SESSION_INFORMATION",
                    "errorDetails": "The session token hasn't been provided",
                },
                "exceptionname": "APINGException",
            },
        },
        "id": "1",
    }
