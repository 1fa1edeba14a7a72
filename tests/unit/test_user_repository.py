from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from methods.database.models import User
from methods.repository import UserRepository


def test_create_writes_exactly_one_row(db):
    user = UserRepository(db).create("Alice", "alice@example.com")

    assert user.id is not None
    rows = db.query(User).filter(User.email == "alice@example.com").all()
    assert len(rows) == 1
    assert rows[0].name == "Alice"

def test_duplicate_email_is_not_rejected_by_repository(db):
    repo = UserRepository(db)
    repo.create("Alice", "same@example.com")
    repo.create("Alice Two", "same@example.com")
    assert db.query(User).filter(User.email == "same@example.com").count() == 2

def test_storage_error_rolls_back_and_propagates_unchanged():
    session = MagicMock()
    err = IntegrityError("INSERT INTO users", {}, Exception("duplicate key"))
    session.commit.side_effect = err

    with pytest.raises(IntegrityError) as ei:
        UserRepository(session).create("Bob", "bob@example.com")

    assert ei.value is err
    session.rollback.assert_called_once()
    session.refresh.assert_not_called()
