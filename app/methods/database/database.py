# /app/methods/database/database.py
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from configs.config import database as db_config

logger = logging.getLogger(__name__)


def _begin_immediate(engine: Engine) -> None:
    """
    pysqlite defers BEGIN until the first write and ignores FOR UPDATE. Taking the
    write lock at BEGIN makes a quota check and its insert one serialized unit.
    """
    @event.listens_for(engine, "connect")
    def _no_implicit_begin(dbapi_conn, conn_rec):
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, *, connect_timeout: int = 0, statement_timeout_ms: int = 0, echo: bool = False) -> Engine:
    kwargs = {"echo": echo}
    connect_args = {}

    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # in-memory db lives in a single connection; share it across threads
        if url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url:
            kwargs["poolclass"] = StaticPool
    elif url.startswith("postgres"):
        if connect_timeout:
            connect_args["connect_timeout"] = connect_timeout
        if statement_timeout_ms:
            connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"

    engine = create_engine(url, connect_args=connect_args, **kwargs)
    if url.startswith("sqlite") and "poolclass" not in kwargs:
        _begin_immediate(engine)
    logger.info(
        "database.py: engine created (dialect=%s, connect_timeout=%s, statement_timeout_ms=%s)",
        engine.dialect.name, connect_timeout or "default", statement_timeout_ms or "none",
    )
    return engine


engine = build_engine(
    db_config.URL,
    connect_timeout=db_config.CONNECT_TIMEOUT,
    statement_timeout_ms=db_config.STATEMENT_TIMEOUT_MS,
    echo=db_config.ECHO,
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()

def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
