"""JSON-RPC request envelope."""

from typing import Any

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"


def rpc_method(operation: str, namespace: str = "SportsAPING", version: str = "v1.0") -> str:
    """Qualify an operation name, e.g. SportsAPING/v1.0/listCompetitions."""
    return f"{namespace}/{version}/{operation}"


class JsonRpcRequest(BaseModel):
    """A single JSON-RPC call. Field order is the wire order."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
    id: str = "1"

    def to_json(self) -> str:
        return self.model_dump_json()
