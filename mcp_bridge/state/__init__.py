from .claims import Claims, CachedClaims
from .worker import WorkerState
from .pending import PendingCall
from .runtime import RuntimeDeps
from .session import StreamSession
from .settings import AppSettings

__all__ = [
    "AppSettings",
    "CachedClaims",
    "Claims",
    "PendingCall",
    "RuntimeDeps",
    "StreamSession",
    "WorkerState",
]
