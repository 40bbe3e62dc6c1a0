"""
Shared rate limiter for API routes.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ricecare.config import settings


limiter = Limiter(key_func=get_remote_address)

# Limit string applied to compute-heavy endpoints
DEFAULT_LIMIT = f"{settings.rate_limit_requests}/minute"
