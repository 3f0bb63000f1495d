"""Shared test helpers.

Focused modules:
- tokens.py: bearer token minting for the configured test tenant
- settings.py: AppSettings builders pointing at the fake worker
- channel.py: in-process stand-in for the worker process
- gateway.py: running app + httpx client wiring
"""

from __future__ import annotations
