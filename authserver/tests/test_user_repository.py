from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import func, select

from authserver.domain.users.exceptions import UserAlreadyExistsError
from authserver.infrastructure.db import build_engine, build_session_factory, init_db
from authserver.infrastructure.db.models import User
from authserver.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authserver.shared.config import DatabaseConfig
from authserver.shared.errors import ErrorKind, InfrastructureError


@pytest.fixture()
def engine(tmp_path: Path):
    engine = build_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'users.db'}"))
    yield engine
    engine.dispose()


@pytest.fixture()
def repository(engine) -> SqlAlchemyUserRepository:
    init_db(engine)
    return SqlAlchemyUserRepository(build_session_factory(engine))


def test_add_commits_and_returns_user(repository: SqlAlchemyUserRepository) -> None:
    user = repository.add("a@x.com", "hash")

    assert user.id is not None
    assert user.refresh_token_hash is None
    assert repository.find_by_email("a@x.com") == user
    assert repository.find_by_id(user.id) == user


def test_duplicate_add_rolls_back(repository: SqlAlchemyUserRepository, engine) -> None:
    repository.add("a@x.com", "hash")

    with pytest.raises(UserAlreadyExistsError):
        repository.add("a@x.com", "other")

    with build_session_factory(engine)() as session:
        assert session.scalar(select(func.count()).select_from(User)) == 1


def test_refresh_hash_set_and_clear(repository: SqlAlchemyUserRepository) -> None:
    user = repository.add("a@x.com", "hash")

    repository.set_refresh_token_hash(user.id, "refresh-hash")
    assert repository.find_by_id(user.id).refresh_token_hash == "refresh-hash"

    assert repository.clear_refresh_token_hash(user.id) is True
    assert repository.clear_refresh_token_hash(user.id) is False
    assert repository.find_by_id(user.id).refresh_token_hash is None


def test_store_failures_become_infrastructure_errors(engine) -> None:
    # Schema never created, so every statement fails.
    repository = SqlAlchemyUserRepository(build_session_factory(engine))

    with pytest.raises(InfrastructureError) as exc_info:
        repository.clear_refresh_token_hash(1)

    assert exc_info.value.code == "database_error"
    assert exc_info.value.kind is ErrorKind.INTERNAL
