# observability/db_metrics.py
import time
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional
from sqlalchemy import event
from sqlalchemy.engine import Engine

from observability.metrics import DB_LAT, DB_ERR, POOL_IN_USE, REPO_LAT

logger = logging.getLogger(__name__)

# repository operation the current thread is running ("add_task", "create_user")
_operation: ContextVar[str] = ContextVar("db_operation", default="none")


def current_operation() -> str:
    return _operation.get()


@contextmanager
def db_operation(name: str):
    """Tags statements issued inside the block with `name` and times the whole operation."""
    token = _operation.set(name)
    t0 = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except Exception as e:
        outcome = type(e).__name__  # TaskLimitReached, NoResultFound, OperationalError...
        raise
    finally:
        _operation.reset(token)
        REPO_LAT.labels(operation=name, outcome=outcome).observe(time.perf_counter() - t0)


def _verb(sql: Optional[str]) -> str:
    if not sql: return "other"
    return (sql.lstrip().split(None, 1)[0] or "other").lower()


def init_db_metrics(engine: Engine):
    @event.listens_for(engine, "before_cursor_execute")
    def _before(cur, conn, stmt, params, ctx, execmany):
        ctx._t0 = time.perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def _after(cur, conn, stmt, params, ctx, execmany):
        DB_LAT.labels(operation=current_operation(), statement=_verb(stmt)).observe(
            time.perf_counter() - getattr(ctx, "_t0", time.perf_counter())
        )

    @event.listens_for(engine, "handle_error")
    def _on_err(ctx):
        DB_ERR.labels(operation=current_operation(), statement=_verb(ctx.statement)).inc()

    @event.listens_for(engine, "checkout")
    def _checkout(dbapi_conn, conn_rec, conn_proxy):
        POOL_IN_USE.inc()

    @event.listens_for(engine, "checkin")
    def _checkin(dbapi_conn, conn_rec):
        POOL_IN_USE.dec()
