from .sse import router as sse_router
from .errors import register_exception_handlers
from .jsonrpc import router as jsonrpc_router
from .discovery import router as discovery_router

__all__ = ["discovery_router", "jsonrpc_router", "register_exception_handlers", "sse_router"]
