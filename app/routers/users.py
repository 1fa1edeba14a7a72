# /app/routers/users.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from methods.repository import UserRepository, get_user_repository
from observability.metrics import USERS_CREATED
from utils import json_body

logger = logging.getLogger(__name__)

class CreateUserJSON(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


router = APIRouter()

@router.post("/users")
def create_user(
    payload: CreateUserJSON = Depends(json_body(CreateUserJSON)),
    repo: UserRepository = Depends(get_user_repository),
):
    if not payload.name or not payload.email:
        logger.warning("users.py: /users rejected: missing name or email")
        raise HTTPException(status_code=400, detail="Name and email are required")

    try:
        user = repo.create(payload.name, payload.email)
    except Exception as e:
        logger.exception("users.py: /users failed to store user '%s': %s", payload.name, e)
        raise HTTPException(status_code=500, detail="Internal server error")

    USERS_CREATED.inc()
    logger.info("users.py: /users created user id=%s", user.id)
    return {"message": "User created successfully"}
