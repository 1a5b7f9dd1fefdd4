import logging
import json
import time
import random
from typing import Any, Dict, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# One JSON line per logged request. Not propagated, so the root handler
# never prints the same event a second time.
structured_logger = logging.getLogger("mealprep.requests")
structured_logger.propagate = False

# Fallback handler when logging.ini was not loaded
if not structured_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    structured_logger.addHandler(handler)
    structured_logger.setLevel(logging.INFO)

# Query parameters that describe a recipe listing request
LISTING_PARAMS = ("tag", "searchTerm", "ingredient", "sort", "page", "query")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Wide-event request logging with tail sampling.

    Errors (5xx) and slow requests are always logged, everything else at
    SAMPLE_RATE. Each event carries the route that handled the request and
    the recipe listing parameters it was called with.
    """

    SLOW_THRESHOLD_MS = 500
    SAMPLE_RATE = 0.05

    def should_log(self, status_code: int, duration_ms: float) -> bool:
        if status_code >= 500 or duration_ms > self.SLOW_THRESHOLD_MS:
            return True
        return random.random() < self.SAMPLE_RATE

    def build_event(
        self, request: Request, status_code: int, duration_ms: float, error: Optional[str]
    ) -> Dict[str, Any]:
        endpoint = request.scope.get("endpoint")
        settings = getattr(request.app.state, "settings", None)
        return {
            "timestamp": time.time(),
            "environment": settings.ENVIRONMENT if settings is not None else None,
            "method": request.method,
            "path": request.url.path,
            "endpoint": getattr(endpoint, "__name__", None),
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request.client.host if request.client else None,
            "listing": {k: v for k, v in request.query_params.items() if k in LISTING_PARAMS},
            "error": error,
        }

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        status_code = 500  # Unless the app returns a response
        error = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            if self.should_log(status_code, duration_ms):
                event = self.build_event(request, status_code, duration_ms, error)
                structured_logger.info(json.dumps(event))
