from sqlalchemy import Column, Integer, String, Text, Date
from .database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False, index=True)
    task = Column(Text, nullable=False)
    date = Column(Date, nullable=False)


class UserLimit(Base):
    """Filled by an external process; one row per username."""
    __tablename__ = "user_limits"

    username = Column(String, primary_key=True)
    max_tasks = Column(Integer, nullable=False)
