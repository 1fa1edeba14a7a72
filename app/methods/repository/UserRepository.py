# /app/methods/repository/UserRepository.py
import logging
from sqlalchemy.orm import Session
from methods.database.models import User
from observability.db_metrics import db_operation

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Writes to the users table. Name/email must already be validated by the caller;
    email uniqueness is left to the storage layer.
    """
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, name: str, email: str) -> User:
        user = User(name=name, email=email)
        with db_operation("create_user"):
            try:
                self.db.add(user)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.refresh(user)
        logger.info("UserRepository.py: inserted user id=%s", user.id)
        return user
