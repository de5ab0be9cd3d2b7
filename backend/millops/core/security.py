"""Security utilities: JWT tokens and password hashing."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt
import redis
from jwt.exceptions import PyJWTError

from millops.core.config import settings

logger = logging.getLogger(__name__)

COOKIE_ACCESS_NAME = "access_token"
COOKIE_SECURE = not settings.debug
COOKIE_SAMESITE = "lax"
ACCESS_TOKEN_MAX_AGE = settings.access_token_expire_minutes * 60


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError as e:
        logger.warning(f"Password verification error: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(),
    ).decode("utf-8")


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token with a unique JTI for blacklisting support."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({
        "exp": expire,
        "iat": now,
        "jti": secrets.token_urlsafe(16),
    })
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT token; None if invalid, expired or revoked."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": ["exp", "sub"]},
        )
    except PyJWTError as e:
        logger.debug(f"JWT decode error: {e}")
        return None

    jti = payload.get("jti")
    if jti and _is_token_blacklisted(jti):
        logger.debug(f"Token {jti} is blacklisted")
        return None
    return payload


def blacklist_token(token: str) -> bool:
    """Revoke a token until its natural expiry.

    The JTI is written to Redis with a matching TTL when ``redis_url`` is set,
    so every worker sees the revocation. Without Redis, or when it cannot be
    reached, the revocation is held in this process only.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_exp": False},
        )
    except PyJWTError:
        return False

    jti = payload.get("jti")
    if not jti:
        return False

    exp = payload.get("exp", 0)
    ttl = max(int(exp - datetime.now(timezone.utc).timestamp()), 60)

    client = _redis_client(socket_connect_timeout=2)
    if client is not None:
        try:
            client.setex(f"{BLACKLIST_KEY_PREFIX}{jti}", ttl, "1")
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis blacklist failed: {e}")

    _prune_memory_blacklist()
    _memory_blacklist[jti] = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    return True


def _is_token_blacklisted(jti: str) -> bool:
    client = _redis_client(socket_connect_timeout=1)
    if client is not None:
        try:
            return bool(client.get(f"{BLACKLIST_KEY_PREFIX}{jti}"))
        except redis.RedisError as e:
            logger.warning(f"Redis blacklist check failed (token may be allowed through): {e}")

    expiry = _memory_blacklist.get(jti)
    if expiry is None:
        return False
    if datetime.now(timezone.utc) < expiry:
        return True
    del _memory_blacklist[jti]
    return False


def _redis_client(socket_connect_timeout: int):
    if not settings.redis_url:
        return None
    return redis.from_url(settings.redis_url, socket_connect_timeout=socket_connect_timeout)


def _prune_memory_blacklist() -> None:
    now = datetime.now(timezone.utc)
    for jti in [k for k, expiry in _memory_blacklist.items() if expiry <= now]:
        del _memory_blacklist[jti]


BLACKLIST_KEY_PREFIX = "token_blacklist:"

# In-memory fallback when Redis is not configured or unavailable
_memory_blacklist: Dict[str, datetime] = {}


def token_from_headers(authorization: str | None, cookie_token: str | None) -> str | None:
    """Pick the bearer token, falling back to the access cookie."""
    if authorization and authorization.startswith("Bearer "):
        token = authorization.split(" ", 1)[1].strip()
        if token:
            return token
    return cookie_token or None
