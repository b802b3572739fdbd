# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from authserver.domain.users.entities import User as DomainUser
from authserver.domain.users.exceptions import UserAlreadyExistsError
from authserver.domain.users.repositories import UserRepository
from authserver.infrastructure.db.models import User
from authserver.shared.errors import InfrastructureError
from authserver.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        refresh_token_hash=row.refresh_token_hash,
        created_at=row.created_at,
    )


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        if isinstance(exc, IntegrityError) and operation == "add":
            raise UserAlreadyExistsError("Email is already in use") from exc
        logger.error(f"users.{operation}: {type(exc).__name__}")
        raise InfrastructureError(
            "database_error",
            message=f"Credential store failed during {operation}",
        ) from exc


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with _store_errors("find_by_email"), self._session_factory.begin() as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with _store_errors("find_by_id"), self._session_factory.begin() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, email: str, password_hash: str) -> DomainUser:
        with _store_errors("add"), self._session_factory.begin() as session:
            row = User(email=email, password_hash=password_hash)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def set_refresh_token_hash(self, user_id: int, token_hash: str) -> None:
        with _store_errors("set_refresh_token_hash"), self._session_factory.begin() as session:
            session.execute(
                update(User).where(User.id == user_id).values(refresh_token_hash=token_hash)
            )

    def clear_refresh_token_hash(self, user_id: int) -> bool:
        with _store_errors("clear_refresh_token_hash"), self._session_factory.begin() as session:
            result = session.execute(
                update(User)
                .where(User.id == user_id, User.refresh_token_hash.is_not(None))
                .values(refresh_token_hash=None)
            )
            return bool(result.rowcount)
