import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notes_backend.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of every request.

    Bodies and headers are never logged: they carry passwords and tokens.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            "%s %s %d %.1fms from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            client_ip,
        )
        return response


CORS_ALLOW_HEADERS = [
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "X-CSRF-Token",
    "Authorization",
    "accept",
    "origin",
    "Cache-Control",
    "X-Requested-With",
]
CORS_ALLOW_METHODS = ["POST", "OPTIONS", "GET", "PUT", "DELETE"]


class PreflightMiddleware(BaseHTTPMiddleware):
    """
    Answers every OPTIONS request with 204 and the fixed CORS headers.

    Nothing behind it sees OPTIONS: no routing, no auth, no header checks.
    """

    headers = {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
        "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "OPTIONS":
            return await call_next(request)
        headers = dict(self.headers)
        # Credentialed requests need the concrete origin, not "*".
        headers["Access-Control-Allow-Origin"] = request.headers.get("origin", "*")
        headers["Vary"] = "Origin"
        return Response(status_code=204, headers=headers)
