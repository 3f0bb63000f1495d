"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mcp_bridge.state.settings import AppSettings
    from mcp_bridge.auth.validator import TokenValidator
    from mcp_bridge.sessions.registry import SessionRegistry
    from mcp_bridge.rpc.correlator import RequestCorrelator
    from mcp_bridge.worker.supervisor import ProcessSupervisor


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    validator: TokenValidator
    supervisor: ProcessSupervisor
    correlator: RequestCorrelator
    sessions: SessionRegistry

    async def start(self) -> None:
        await self.supervisor.start()

    async def shutdown(self) -> None:
        try:
            self.sessions.close_all()
            await self.supervisor.stop()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
