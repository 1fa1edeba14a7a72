# /app/observability/metrics.py
import logging

from fastapi import FastAPI
from prometheus_client import (
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

logger = logging.getLogger(__name__)

REG = REGISTRY

# -----------------------
# HTTP request metrics (middleware will fill these)
# -----------------------
REQ_LATENCY = Histogram(
    "taskquota_request_duration_seconds",
    "Request duration (seconds)",
    ["path", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
    registry=REG,
)
REQ_COUNT = Counter(
    "taskquota_requests_total",
    "Total HTTP requests",
    ["path", "method", "status"],
    registry=REG,
)

# -----------------------
# DB metrics (engine event hooks + repository operations fill these)
# -----------------------
DB_LAT = Histogram(
    "taskquota_db_query_seconds", "DB statement latency (s)",
    ["operation", "statement"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
    registry=REG,
)
DB_ERR = Counter("taskquota_db_errors_total", "DB errors", ["operation", "statement"], registry=REG)
POOL_IN_USE = Gauge("taskquota_db_pool_in_use", "Checked-out connections", registry=REG)
REPO_LAT = Histogram(
    "taskquota_repository_seconds",
    "Repository operation duration, lock wait included (s)",
    ["operation", "outcome"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
    registry=REG,
)

# -----------------------
# Domain counters
# -----------------------
USERS_CREATED = Counter("taskquota_users_created_total", "Users created", registry=REG)
TASKS_ADDED = Counter("taskquota_tasks_added_total", "Tasks added", registry=REG)
TASK_LIMIT_REJECTIONS = Counter(
    "taskquota_task_limit_rejections_total",
    "Tasks rejected because the daily quota was used up",
    registry=REG,
)


def install_http_metrics(app: FastAPI) -> None:
    from observability.http_metrics import HTTPMetricsMiddleware
    app.add_middleware(HTTPMetricsMiddleware)


def start_metrics_server(port: int) -> bool:
    """Serve the registry on its own port; the API keeps only its own routes."""
    if not port:
        logger.info("metrics.py: METRICS_PORT not set, exposition server disabled")
        return False
    start_http_server(port, registry=REG)
    logger.info("metrics.py: Prometheus exposition server listening on port %s", port)
    return True
