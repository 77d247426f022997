"""Portal login: signed identity claims + Redis session management."""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time
from typing import Optional

import structlog
from pydantic import ValidationError
from redis.asyncio import Redis

from src.schemas.portal import PortalClaims

logger = structlog.get_logger()

SESSION_PREFIX = "portal_session:"
COOKIE_NAME = "portal_token"


def sign_identity_claims(data: dict, secret: str) -> str:
    """HMAC-SHA256 hex digest over the sorted `key=value` data-check string.

    Empty values are left out, so optional claims the provider omits and
    claims it sends blank sign the same way.
    """
    filtered = {k: v for k, v in data.items() if k != "hash" and v not in (None, "")}
    data_check_string = "\n".join(f"{k}={v}" for k, v in sorted(filtered.items()))

    secret_key = hashlib.sha256(secret.encode("utf-8")).digest()
    return hmac.new(
        secret_key,
        data_check_string.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_identity_claims(
    data: dict,
    secret: str,
    max_age: int,
    now: Optional[float] = None,
) -> Optional[PortalClaims]:
    """Check the provider's signature and freshness of a login callback.

    Args:
        data: Callback fields (sub, email, first_name, last_name,
            profile_image_url, auth_date, hash)
        secret: Secret shared with the identity provider
        max_age: Oldest acceptable `auth_date`, in seconds
        now: Current unix time (for tests)

    Returns:
        The verified claims, or None if the hash, age or fields are invalid
    """
    check_hash = str(data.get("hash") or "")
    if not check_hash or not secret or not data.get("sub"):
        return None

    if not hmac.compare_digest(sign_identity_claims(data, secret), check_hash):
        logger.warning("portal_login_bad_signature", sub=data.get("sub"))
        return None

    try:
        auth_date = int(data.get("auth_date") or 0)
    except (TypeError, ValueError):
        return None
    now = time.time() if now is None else now
    if now - auth_date > max_age:
        logger.warning("portal_login_expired", sub=data.get("sub"), auth_date=auth_date)
        return None

    try:
        return PortalClaims.model_validate(data)
    except ValidationError:
        return None


async def create_session(redis: Redis, claims: PortalClaims, ttl: int) -> str:
    """Store the claims under a fresh random token.

    Returns:
        Session token for the cookie
    """
    token = secrets.token_urlsafe(32)
    await redis.setex(f"{SESSION_PREFIX}{token}", ttl, claims.model_dump_json())

    logger.info("portal_session_created", sub=claims.sub, email=claims.email)
    return token


async def get_session(redis: Redis, token: Optional[str]) -> Optional[PortalClaims]:
    """Claims for a session token, or None if missing/expired/corrupt."""
    if not token:
        return None

    data = await redis.get(f"{SESSION_PREFIX}{token}")
    if not data:
        return None

    try:
        return PortalClaims.model_validate_json(data)
    except ValidationError:
        return None


async def delete_session(redis: Redis, token: str) -> None:
    await redis.delete(f"{SESSION_PREFIX}{token}")
