"""Rate limiting configuration for the admin API."""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from admissions_api.core.config import settings

IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
DEFAULT_LIMITS = (
    []
    if IS_TESTING or settings.RATE_LIMIT_API <= 0
    else [f"{settings.RATE_LIMIT_API}/minute"]
)

# Tests always use in-memory storage; otherwise honour the configured backend
# (e.g. redis://...) so limits are shared across workers.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://" if IS_TESTING else settings.RATE_LIMIT_STORAGE_URI,
    default_limits=DEFAULT_LIMITS,
)
