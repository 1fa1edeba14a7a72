# /app/utils.py
import logging
from datetime import date
from typing import Callable, Type, TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
INVALID_PAYLOAD = "Invalid request payload"

M = TypeVar("M", bound=BaseModel)


def today() -> date:
    """Server-local calendar date used to stamp new tasks."""
    return date.today()


def json_body(model: Type[M]) -> Callable:
    """
    Dependency decoding the raw request body as JSON into `model`, whatever the
    request's Content-Type says. A JSON null decodes to an empty model, so the
    handler's required-field check answers it. Anything undecodable is a 400.
    """
    async def _decode(request: Request) -> M:
        raw = await request.body()
        if raw.strip() == b"null":
            return model()
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "utils.py: rejected payload on %s %s: %s",
                request.method, request.url.path, e.errors(include_url=False),
            )
            raise HTTPException(status_code=400, detail=INVALID_PAYLOAD)
    return _decode


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Every response leaves with Content-Type: application/json, errors included."""
    async def dispatch(self, request: Request, call_next):
        resp = await call_next(request)
        resp.headers["Content-Type"] = JSON_CONTENT_TYPE
        return resp


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # runs in the outermost error middleware, outside JSONContentTypeMiddleware
    logger.exception("utils.py: unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


def install_json_api(app: FastAPI) -> None:
    app.add_middleware(JSONContentTypeMiddleware)
    app.add_exception_handler(Exception, unhandled_error_handler)
