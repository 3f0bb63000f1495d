"""Decoded token claims (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class Claims:
    """Structural claims carried by a bearer token.

    `audience` is normalized to a tuple because issuers may emit either a single
    string or a list. `raw` keeps the full decoded payload for downstream use.
    """

    subject: str | None = None
    issuer: str | None = None
    audience: tuple[str, ...] = ()
    expires_at: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True, slots=True)
class CachedClaims:
    claims: Claims
    expires_at: float

    @property
    def subject(self) -> str | None:
        return self.claims.subject

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


__all__ = ["CachedClaims", "Claims"]
