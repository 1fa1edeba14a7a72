# /app/methods/repository/__init__.py
from fastapi import Depends
from sqlalchemy.orm import Session
from methods.database.database import get_db
from .UserRepository import UserRepository
from .TaskRepository import TaskRepository, TaskLimitReached

def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)

def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)

__all__ = [
    "UserRepository",
    "TaskRepository",
    "TaskLimitReached",
    "get_user_repository",
    "get_task_repository",
]
