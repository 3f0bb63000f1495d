"""Logging configuration (env-resolved constants only)."""

from __future__ import annotations

import os

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SHOW_ACCESS_LOGS = "SHOW_ACCESS_LOGS"

LOG_LEVEL: str = (os.getenv(ENV_LOG_LEVEL) or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

__all__ = ["ENV_LOG_LEVEL", "ENV_SHOW_ACCESS_LOGS", "LOG_FORMAT", "LOG_LEVEL"]
