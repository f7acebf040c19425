from collections.abc import Awaitable, Callable, Sequence

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOWED_METHODS = "GET, POST, OPTIONS"


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """
    CORS restricted to an explicit allow-list.

    A listed origin is echoed back with `Vary: Origin`; any other origin gets
    the first listed origin, which browsers reject. Preflight requests are
    answered here without reaching the routers.
    """

    def __init__(self, app, allowed_origins: Sequence[str]):
        super().__init__(app)
        self._allowed_origins = list(allowed_origins)

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        headers = {
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
        }
        if origin and origin in self._allowed_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        elif self._allowed_origins:
            headers["Access-Control-Allow-Origin"] = self._allowed_origins[0]
        return headers

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        headers = self.cors_headers(request.headers.get("origin"))
        if request.method == "OPTIONS":
            return PlainTextResponse("ok", headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
