# /app/methods/repository/TaskRepository.py
import logging
from datetime import date
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Query, Session
from methods.database.models import Task, UserLimit
from observability.db_metrics import db_operation

logger = logging.getLogger(__name__)


class TaskLimitReached(Exception):
    def __init__(self, username: str, max_tasks: int) -> None:
        self.username = username
        self.max_tasks = max_tasks
        super().__init__(f"task limit reached for user {username}")


class TaskRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def limit_query(self, username: str) -> Query:
        # row lock on PostgreSQL; SQLite gets BEGIN IMMEDIATE from build_engine
        return (
            self.db.query(UserLimit)
            .filter(UserLimit.username == username)
            .with_for_update()
        )

    def count_for_day(self, username: str, day: date) -> int:
        return (
            self.db.query(func.count(Task.id))
            .filter(Task.username == username, Task.date == day)
            .scalar()
        )

    def add_task(self, username: str, task: str, day: Optional[date] = None) -> Task:
        """
        Inserts a task for (username, day) unless the user's daily quota is used up.

        Limit lookup, count and insert run in one transaction that holds the write
        lock from its first statement, so concurrent calls for the same user are
        serialized.

        Raises:
          TaskLimitReached: the day already holds max_tasks tasks.
          sqlalchemy.exc.NoResultFound: no user_limits row for username.
          sqlalchemy.exc.SQLAlchemyError: any other storage failure.
        """
        day = day or date.today()
        with db_operation("add_task"):
            try:
                limit = self.limit_query(username).one()
                count = self.count_for_day(username, day)
                if count >= limit.max_tasks:
                    logger.info(
                        "TaskRepository.py: limit reached for '%s' on %s (%s/%s)",
                        username, day.isoformat(), count, limit.max_tasks,
                    )
                    raise TaskLimitReached(username, limit.max_tasks)

                row = Task(username=username, task=task, date=day)
                self.db.add(row)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

            self.db.refresh(row)
        logger.info(
            "TaskRepository.py: inserted task id=%s for '%s' on %s (%s/%s)",
            row.id, username, day.isoformat(), count + 1, limit.max_tasks,
        )
        return row
