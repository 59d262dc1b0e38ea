"""Rate limiting middleware using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

sync_limiter = limiter.limit(settings.sync_rate_limit)
upload_limiter = limiter.limit(settings.upload_rate_limit)
