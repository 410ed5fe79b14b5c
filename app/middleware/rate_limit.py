"""Rate limiting using slowapi."""

import hashlib

from fastapi import Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address

from app.config import settings


def get_caller_key(request: Request) -> str:
    """
    Rate limit key: a digest of the caller's bearer token, falling back to the
    client address.

    The token identifies one signed-in user, so limits follow the user across
    addresses without a round trip to the identity provider. Only the digest
    is kept in limiter storage.
    """
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:]
        return "token:" + hashlib.sha256(token.encode("utf-8")).hexdigest()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_caller_key,
    storage_uri="memory://",  # In-memory storage
)

# Limit applied to language model calls
RECOMMEND_LIMIT = settings.recommend_rate_limit


def get_rate_limit_exceeded_handler():
    """Get rate limit exceeded handler."""
    return _rate_limit_exceeded_handler
