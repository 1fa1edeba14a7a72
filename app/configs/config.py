# config.py
from types import SimpleNamespace
from dotenv import load_dotenv, find_dotenv
import os

from configs.log_config import setup_logging

# --- Load .env (doesn't override real env vars) ---
load_dotenv(find_dotenv(filename=".env"), override=False)

# --- tiny env helper ---
def env(name, default=None, *, required=False, cast=str):
    v = os.getenv(name, default)
    if required and (v is None or v == ""):
        raise RuntimeError(f"{name} is required but missing")
    if v is None:
        return None
    if cast is bool:
        return str(v).lower() in {"1", "true", "yes", "on"}
    if cast is int:
        return int(v)
    return v  # str

# ---------- core app config ----------
DATABASE_URL = env("DATABASE_URL", required=True)
HOST         = env("HOST", "0.0.0.0")
PORT         = env("PORT", 8000, cast=int)
DEBUG        = env("DEBUG", False, cast=bool)

# ---------- database ----------
DB_CONNECT_TIMEOUT      = env("DB_CONNECT_TIMEOUT", 0, cast=int)       # seconds, 0 = driver default
DB_STATEMENT_TIMEOUT_MS = env("DB_STATEMENT_TIMEOUT_MS", 0, cast=int)  # 0 = no limit

# ---------- metrics ----------
METRICS_PORT = env("METRICS_PORT", 0, cast=int)  # 0 = exposition server disabled

# ---------- Logging ----------
LOG_DIR   = env("LOG_DIR")  # unset → stderr
LOG_NAME  = env("LOG_NAME", "logs.log")
LOG_LEVEL = env("LOG_LEVEL", "INFO")
log_file_path = os.path.join(LOG_DIR, LOG_NAME) if LOG_DIR else None
setup_logging(LOG_DIR, LOG_NAME, LOG_LEVEL)

# ---------- Pretty namespaces for simple imports ----------
config = SimpleNamespace(
    DATABASE_URL=DATABASE_URL,
    HOST=HOST,
    PORT=PORT,
    DEBUG=DEBUG,
    env=env,
)

database = SimpleNamespace(
    URL=DATABASE_URL,
    CONNECT_TIMEOUT=DB_CONNECT_TIMEOUT,
    STATEMENT_TIMEOUT_MS=DB_STATEMENT_TIMEOUT_MS,
    ECHO=DEBUG,
)

metrics = SimpleNamespace(
    PORT=METRICS_PORT,
)

logs = SimpleNamespace(
    LOG_DIR=LOG_DIR,
    LOG_NAME=LOG_NAME,
    LEVEL=LOG_LEVEL,
    FILE=log_file_path,
)

__all__ = ["config", "database", "metrics", "logs", "env"]
