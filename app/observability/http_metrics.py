# observability/http_metrics.py
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from observability.metrics import REQ_COUNT, REQ_LATENCY

UNMATCHED = "<unmatched>"


def route_label(scope) -> str:
    """Route template set by the router, or one constant label for paths no route matched."""
    return getattr(scope.get("route"), "path", None) or UNMATCHED


class HTTPMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        t0 = time.perf_counter()
        status = 500
        try:
            resp = await call_next(request)
            status = resp.status_code
            return resp
        finally:
            # route is resolved by the router during call_next
            path = route_label(request.scope)
            REQ_LATENCY.labels(path=path, method=request.method).observe(time.perf_counter() - t0)
            REQ_COUNT.labels(path=path, method=request.method, status=str(status)).inc()
