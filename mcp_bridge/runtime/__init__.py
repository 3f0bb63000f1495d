"""Runtime package.

Keep this module dependency-light: importing `mcp_bridge.runtime.*` from unit
tests should not spawn the worker or touch the network.
"""

__all__: list[str] = []
