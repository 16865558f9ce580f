"""
Shared slowapi limiter for all routers
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings

settings = get_settings()

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

READ_LIMIT = settings.read_rate_limit
WRITE_LIMIT = settings.write_rate_limit
