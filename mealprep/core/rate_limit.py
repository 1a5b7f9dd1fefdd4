# rate_limit.py
# Per client IP request limit, enforced on every route through an app-level dependency.

import logging
import time
from fastapi import HTTPException, Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

# Namespace for the single limit shared by all routes
DEFAULT_SCOPE = "default"


def build_limiter(enabled: bool) -> Limiter:
    # Uses client IP address for rate limit key
    return Limiter(key_func=get_remote_address, enabled=enabled)


def enforce_rate_limit(request: Request) -> None:
    """
    Count the request against the client's RATE_LIMIT window.
    Raises 429 with a Retry-After header once the window is used up.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    limit = parse(request.app.state.settings.RATE_LIMIT)
    client = get_remote_address(request)
    if limiter.limiter.hit(limit, DEFAULT_SCOPE, client):
        return

    reset_time, _ = limiter.limiter.get_window_stats(limit, DEFAULT_SCOPE, client)
    retry_after = max(int(reset_time - time.time()), 1)
    logger.warning(f"Rate limit {limit} exceeded by {client} on {request.url.path}")
    raise HTTPException(
        status_code=429,
        detail=f"Rate limit exceeded: {limit}",
        headers={"Retry-After": str(retry_after)},
    )
