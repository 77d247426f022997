"""FastAPI dependencies for customer portal authentication."""

from __future__ import annotations

from typing import Optional

from fastapi import Cookie, Depends, HTTPException
from redis.asyncio import Redis

from src.portal.auth import get_session
from src.redis_client import get_redis
from src.schemas.portal import PortalClaims


async def get_portal_claims(
    portal_token: Optional[str] = Cookie(None),
    redis: Redis = Depends(get_redis),
) -> Optional[PortalClaims]:
    """Claims of the signed-in customer, or None for anonymous visitors."""
    if not portal_token:
        return None
    return await get_session(redis, portal_token)


async def require_portal_claims(
    claims: Optional[PortalClaims] = Depends(get_portal_claims),
) -> PortalClaims:
    """Like get_portal_claims, but 401 when nobody is signed in."""
    if claims is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return claims
