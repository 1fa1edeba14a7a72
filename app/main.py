# /app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from configs.config import config, metrics as metrics_config
from routers.users import router as users_router
from routers.tasks import router as tasks_router

from observability.metrics import install_http_metrics, start_metrics_server
from observability.db_metrics import init_db_metrics

from methods.database.database import engine
from utils import install_json_api

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    start_metrics_server(metrics_config.PORT)
    logger.info("main.py: Listening on port %s (POST /users, POST /tasks)", config.PORT)
    try:
        yield
    finally:
        logger.info("main.py: lifespan shutdown → disposing DB engine")
        engine.dispose()

app = FastAPI(lifespan=lifespan)

# ---- HTTP metrics middleware ----
install_http_metrics(app)

# ---- Content-Type: application/json on every response ----
install_json_api(app)

# ---- DB metrics ----
init_db_metrics(engine)

# ---- Routers ----
app.include_router(users_router, tags=["users"])
app.include_router(tasks_router, tags=["tasks"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
