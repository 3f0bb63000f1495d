"""Worker process configuration (env names and defaults only)."""

from __future__ import annotations

ENV_MCP_WORKER_COMMAND = "MCP_WORKER_COMMAND"
ENV_MCP_WORKER_CWD = "MCP_WORKER_CWD"
ENV_WORKER_RESTART_DELAY_S = "WORKER_RESTART_DELAY_S"
ENV_WORKER_CALL_TIMEOUT_S = "WORKER_CALL_TIMEOUT_S"
ENV_WORKER_FAIL_PENDING_ON_EXIT = "WORKER_FAIL_PENDING_ON_EXIT"
ENV_WORKER_READ_CHUNK_BYTES = "WORKER_READ_CHUNK_BYTES"

DEFAULT_MCP_WORKER_COMMAND = "node dist/index.js"
# Fixed delay between observing a worker exit and spawning its replacement.
DEFAULT_WORKER_RESTART_DELAY_S = 1.0
DEFAULT_WORKER_CALL_TIMEOUT_S = 30.0
DEFAULT_WORKER_FAIL_PENDING_ON_EXIT = False
DEFAULT_WORKER_READ_CHUNK_BYTES = 64 * 1024

# Grace period for terminate() before the worker is killed on shutdown.
WORKER_STOP_GRACE_S = 5.0

__all__ = [
    "ENV_MCP_WORKER_COMMAND",
    "ENV_MCP_WORKER_CWD",
    "ENV_WORKER_RESTART_DELAY_S",
    "ENV_WORKER_CALL_TIMEOUT_S",
    "ENV_WORKER_FAIL_PENDING_ON_EXIT",
    "ENV_WORKER_READ_CHUNK_BYTES",
    "DEFAULT_MCP_WORKER_COMMAND",
    "DEFAULT_WORKER_RESTART_DELAY_S",
    "DEFAULT_WORKER_CALL_TIMEOUT_S",
    "DEFAULT_WORKER_FAIL_PENDING_ON_EXIT",
    "DEFAULT_WORKER_READ_CHUNK_BYTES",
    "WORKER_STOP_GRACE_S",
]
