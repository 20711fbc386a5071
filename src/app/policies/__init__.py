"""Políticas de admissão: rate limit e autenticação de chamadores."""

from __future__ import annotations

from app.policies.rate_limiter import RATE_LIMIT_PREFIX, RateLimiter
from app.policies.token_authority import TokenAuthority

__all__ = ["RATE_LIMIT_PREFIX", "RateLimiter", "TokenAuthority"]
