"""Shared rate limiter instance for use across route files."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from millops.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

READ_LIMIT = "60/minute"
WRITE_LIMIT = "30/minute"
LOGIN_LIMIT = "5/minute"
