# /app/routers/tasks.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from methods.repository import TaskRepository, TaskLimitReached, get_task_repository
from observability.metrics import TASKS_ADDED, TASK_LIMIT_REJECTIONS
from utils import json_body, today

logger = logging.getLogger(__name__)

class AddTaskJSON(BaseModel):
    username: Optional[str] = None
    task: Optional[str] = None


router = APIRouter()

@router.post("/tasks")
def add_task(
    payload: AddTaskJSON = Depends(json_body(AddTaskJSON)),
    repo: TaskRepository = Depends(get_task_repository),
):
    if not payload.username or not payload.task:
        logger.warning("tasks.py: /tasks rejected: missing username or task")
        raise HTTPException(status_code=400, detail="Username and task are required")

    day = today()
    try:
        repo.add_task(payload.username, payload.task, day)
    except TaskLimitReached as e:
        TASK_LIMIT_REJECTIONS.inc()
        logger.warning("tasks.py: /tasks %s (max_tasks=%s, date=%s)", e, e.max_tasks, day.isoformat())
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.exception("tasks.py: /tasks failed for user '%s': %s", payload.username, e)
        raise HTTPException(status_code=500, detail="Internal server error")

    TASKS_ADDED.inc()
    logger.info("tasks.py: /tasks added task for '%s' on %s", payload.username, day.isoformat())
    return {"message": "Task added successfully"}
