"""
Logging por petición y métricas Prometheus.

Las métricas se etiquetan con la plantilla de la ruta (``/authors/{author_id}``)
y no con la URL concreta, así el número de series no depende de los ids que
pidan los clientes.
"""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

logger = logging.getLogger("library_service.http")

UNMATCHED_ROUTE = "<unmatched>"

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"]
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"]
)


def route_label(request: Request) -> str:
    """Plantilla de la ruta que atendió la petición, o UNMATCHED_ROUTE."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def setup_observability(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-Id") or str(uuid4())
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_id=%s method=%s path=%s unhandled error",
                request_id, request.method, request.url.path
            )
            raise

        elapsed = time.perf_counter() - start
        route = route_label(request)
        logger.info(
            "request_id=%s method=%s path=%s route=%s status=%s duration_ms=%d",
            request_id, request.method, request.url.path, route,
            response.status_code, elapsed * 1000
        )
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(request.method, route).observe(elapsed)

        response.headers["X-Request-Id"] = request_id
        return response

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
