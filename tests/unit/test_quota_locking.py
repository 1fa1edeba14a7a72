import threading
import time
from datetime import date

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import sessionmaker

from methods.database.database import Base, build_engine
from methods.database.models import Task, UserLimit
from methods.repository import TaskRepository, TaskLimitReached

DAY = date(2024, 1, 1)


class SlowCountRepository(TaskRepository):
    """Keeps the transaction open between the count and the insert."""
    def count_for_day(self, username, day):
        n = super().count_for_day(username, day)
        time.sleep(0.3)
        return n


@pytest.fixture()
def file_sessions(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'quota.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


def test_concurrent_add_task_on_file_sqlite_keeps_quota(file_sessions):
    with file_sessions() as s:
        s.add(UserLimit(username="u", max_tasks=1))
        s.commit()

    start = threading.Barrier(2)
    results = []
    results_lock = threading.Lock()

    def worker(i):
        with file_sessions() as s:
            start.wait()
            try:
                SlowCountRepository(s).add_task("u", f"task-{i}", DAY)
                out = "ok"
            except TaskLimitReached:
                out = "limit"
            with results_lock:
                results.append(out)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert sorted(results) == ["limit", "ok"]
    with file_sessions() as s:
        assert s.query(Task).filter(Task.username == "u", Task.date == DAY).count() == 1

def test_limit_lookup_locks_the_row_on_postgresql(db):
    stmt = TaskRepository(db).limit_query("alice").statement
    sql = str(stmt.compile(dialect=postgresql.dialect()))
    assert "FROM user_limits" in sql
    assert sql.rstrip().endswith("FOR UPDATE")
