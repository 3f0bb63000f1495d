"""Configuration module exports (env names, defaults and protocol constants only)."""

from .jsonrpc import JSONRPC_VERSION, JSONRPC_INTERNAL_ERROR

__all__ = [
    "JSONRPC_INTERNAL_ERROR",
    "JSONRPC_VERSION",
]
