import logging

from fastapi import Depends, HTTPException, Request, status

from booking_engine.api.dependencies import get_rate_limiter
from booking_engine.application.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."


def client_address(request: Request) -> str:
    """
    The socket peer as seen by the app.

    Forwarded headers are never read here. Behind a reverse proxy the
    ProxyHeadersMiddleware rewrites the peer from X-Forwarded-For, and only
    for proxies listed in ``forwarded_allow_ips``.
    """
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RateLimit:
    """Route dependency enforcing the named rule, keyed by the route template."""

    def __init__(self, rule_name: str) -> None:
        self.rule_name = rule_name

    async def __call__(
        self,
        request: Request,
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> None:
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        decision = limiter.check(client_address(request), endpoint, self.rule_name)
        if decision.allowed:
            return

        logger.warning(
            "Rate limit exceeded",
            extra={"endpoint": endpoint, "retry_after": decision.retry_after_seconds},
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=RATE_LIMIT_MESSAGE,
            headers={"Retry-After": str(decision.retry_after_seconds)},
        )
