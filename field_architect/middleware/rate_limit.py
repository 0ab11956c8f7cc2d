"""
Shared rate limiter for analysis endpoints.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from field_architect.config import settings

limiter = Limiter(key_func=get_remote_address)

# Limit string applied to CPU-bound analysis routes
ANALYSIS_RATE_LIMIT = f"{settings.rate_limit_requests}/minute"
