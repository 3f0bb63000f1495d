"""Authenticated HTTP/SSE gateway in front of a stdio JSON-RPC (MCP) worker."""

__version__ = "1.0.0"

__all__ = ["__version__"]
