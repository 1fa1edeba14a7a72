# tests/conftest.py
import pytest
from datetime import date
import os, sys
from pathlib import Path

# repo root = folder that contains both `app/` and `tests/`
REPO_ROOT = Path(__file__).resolve().parents[1]
APP_DIR = REPO_ROOT / "app"

# Make `from main import app` and `from routers...` work
sys.path.insert(0, str(APP_DIR))

# in-memory SQLite shared across threads (StaticPool), set before configs.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("METRICS_PORT", None)


@pytest.fixture()
def db():
    from methods.database.database import Base, SessionLocal, engine
    import methods.database.models  # noqa: F401  (registers tables)

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    from fastapi.testclient import TestClient
    from main import app

    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def set_limit(db):
    from methods.database.models import UserLimit

    def _set(username: str, max_tasks: int):
        db.add(UserLimit(username=username, max_tasks=max_tasks))
        db.commit()
    return _set


@pytest.fixture()
def add_existing_tasks(db):
    from methods.database.models import Task

    def _add(username: str, n: int, day: date):
        for i in range(n):
            db.add(Task(username=username, task=f"existing-{i}", date=day))
        db.commit()
    return _add


@pytest.fixture()
def count_tasks(db):
    from methods.database.models import Task

    def _count(username: str, day: date) -> int:
        db.expire_all()
        return db.query(Task).filter(Task.username == username, Task.date == day).count()
    return _count
