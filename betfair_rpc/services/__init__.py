"""Services for the Betfair JSON-RPC client."""
