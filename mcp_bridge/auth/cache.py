"""Time-bounded cache of validated token claims."""

from __future__ import annotations

import time
from collections.abc import Callable

from mcp_bridge.state.claims import Claims, CachedClaims

TimeFn = Callable[[], float]


class TokenCache:
    """Map raw token text to claims that passed validation.

    Entries are only returned while fresh. A stale entry is evicted on lookup,
    and every insert first sweeps out all stale entries.
    All access happens on the event loop thread, so no lock is taken.
    """

    def __init__(self, *, ttl_s: float, now_fn: TimeFn | None = None) -> None:
        self.ttl_s = max(0.0, float(ttl_s))
        self._now = now_fn or time.time
        self._entries: dict[str, CachedClaims] = {}

    def get(self, token: str) -> Claims | None:
        entry = self._entries.get(token)
        if entry is None:
            return None
        if not entry.is_fresh(self._now()):
            del self._entries[token]
            return None
        return entry.claims

    def put(self, token: str, claims: Claims) -> CachedClaims:
        # Tokens seen once are never looked up again; reclaim them here.
        self.prune()
        expires_at = self._now() + self.ttl_s
        # Never trust a cached token past its own expiry claim.
        if claims.expires_at is not None:
            expires_at = min(expires_at, float(claims.expires_at))
        entry = CachedClaims(claims=claims, expires_at=expires_at)
        self._entries[token] = entry
        return entry

    def prune(self) -> int:
        now = self._now()
        stale = [token for token, entry in self._entries.items() if not entry.is_fresh(now)]
        for token in stale:
            del self._entries[token]
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["TokenCache"]
