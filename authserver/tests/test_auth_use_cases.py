from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime

import pytest

from authserver.application.services.auth_service import AuthService
from authserver.application.services.token_signing import (
    JwtTokenSigner,
    TokenIssuer,
    TokenKind,
)
from authserver.application.use_cases.auth import (
    LogOutUseCase,
    RefreshTokensUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from authserver.domain.users.entities import User
from authserver.domain.users.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from authserver.domain.users.repositories import PasswordHasher, UserRepository
from authserver.shared.errors import ErrorKind, InfrastructureError

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, email: str, password_hash: str) -> User:
        if self.find_by_email(email) is not None:
            raise UserAlreadyExistsError()
        user = User(
            id=self._seq,
            email=email,
            password_hash=password_hash,
            refresh_token_hash=None,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._users[user.id] = user
        return user

    def set_refresh_token_hash(self, user_id: int, token_hash: str) -> None:
        self._users[user_id] = replace(self._users[user_id], refresh_token_hash=token_hash)

    def clear_refresh_token_hash(self, user_id: int) -> bool:
        user = self._users.get(user_id)
        if user is None or user.refresh_token_hash is None:
            return False
        self._users[user_id] = replace(user, refresh_token_hash=None)
        return True


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, hashed: str, password: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> Iterator[TokenIssuer]:
    issuer = TokenIssuer(
        access_signer=JwtTokenSigner(ACCESS_SECRET, ttl=900),
        refresh_signer=JwtTokenSigner(REFRESH_SECRET, ttl=604800),
    )
    yield issuer
    issuer.close()


def make_service(users: UserRepository, tokens: TokenIssuer) -> AuthService:
    hasher = DeterministicHasher()
    return AuthService(
        sign_up=SignUpUseCase(users=users, password_hasher=hasher, tokens=tokens),
        sign_in=SignInUseCase(users=users, password_hasher=hasher, tokens=tokens),
        log_out=LogOutUseCase(users=users),
        refresh=RefreshTokensUseCase(users=users, password_hasher=hasher, tokens=tokens),
    )


def test_sign_up_returns_pair_and_stores_refresh_hash(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)

    pair = service.sign_up("a@x.com", "p1")

    user = users.find_by_email("a@x.com")
    assert user is not None
    assert user.password_hash == "hashed:p1"
    assert user.refresh_token_hash == f"hashed:{pair.refresh_token}"
    assert tokens.verify(TokenKind.ACCESS, pair.access_token).sub == user.id
    assert tokens.verify(TokenKind.REFRESH, pair.refresh_token).email == "a@x.com"


def test_sign_up_twice_with_same_email_conflicts(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)
    service.sign_up("a@x.com", "p1")

    with pytest.raises(UserAlreadyExistsError) as excinfo:
        service.sign_up("a@x.com", "something-else")

    assert excinfo.value.kind is ErrorKind.CONFLICT


def test_sign_in_overwrites_stored_refresh_hash(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)
    first = service.sign_up("a@x.com", "p1")

    second = service.sign_in("a@x.com", "p1")

    user = users.find_by_email("a@x.com")
    assert user is not None
    assert user.refresh_token_hash == f"hashed:{second.refresh_token}"
    assert second.refresh_token != first.refresh_token


def test_sign_in_failures_share_the_same_kind(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)
    service.sign_up("a@x.com", "p1")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        service.sign_in("a@x.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        service.sign_in("nobody@x.com", "p1")

    assert wrong_password.value.kind is unknown_email.value.kind
    assert wrong_password.value.code == unknown_email.value.code


def test_refresh_rotates_and_rejects_reuse(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)
    t1 = service.sign_up("a@x.com", "p1")
    user = users.find_by_email("a@x.com")
    assert user is not None

    t2 = service.refresh_tokens(user.id, user.email, t1.refresh_token)

    assert t2.refresh_token != t1.refresh_token
    with pytest.raises(InvalidCredentialsError):
        service.refresh_tokens(user.id, user.email, t1.refresh_token)

    t3 = service.refresh_tokens(user.id, user.email, t2.refresh_token)
    assert t3.refresh_token not in (t1.refresh_token, t2.refresh_token)


def test_refresh_after_logout_fails(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)
    pair = service.sign_up("a@x.com", "p1")
    user = users.find_by_email("a@x.com")
    assert user is not None

    service.log_out(user.id)

    with pytest.raises(InvalidCredentialsError):
        service.refresh_tokens(user.id, user.email, pair.refresh_token)


def test_refresh_for_unknown_user_fails(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)
    pair = service.sign_up("a@x.com", "p1")

    with pytest.raises(InvalidCredentialsError):
        service.refresh_tokens(999, "a@x.com", pair.refresh_token)
    with pytest.raises(InvalidCredentialsError):
        service.refresh_tokens(1, "other@x.com", pair.refresh_token)


def test_logout_is_idempotent(users: InMemoryUserRepository, tokens: TokenIssuer) -> None:
    service = make_service(users, tokens)
    service.sign_up("a@x.com", "p1")

    service.log_out(1)
    service.log_out(1)

    user = users.find_by_id(1)
    assert user is not None
    assert user.refresh_token_hash is None
    assert not user.is_logged_in


def test_logout_propagates_store_failure(tokens: TokenIssuer) -> None:
    class BrokenRepository(InMemoryUserRepository):
        def clear_refresh_token_hash(self, user_id: int) -> bool:
            raise InfrastructureError("database_error")

    service = make_service(BrokenRepository(), tokens)

    with pytest.raises(InfrastructureError):
        service.log_out(1)


def test_access_only_flows_leave_refresh_session_untouched(
    users: InMemoryUserRepository, tokens: TokenIssuer
) -> None:
    service = make_service(users, tokens)

    legacy = service.sign_up_access_only("v1@x.com", "p1")
    user = users.find_by_email("v1@x.com")
    assert user is not None
    assert user.refresh_token_hash is None
    assert tokens.verify(TokenKind.ACCESS, legacy.access_token).sub == user.id

    pair = service.sign_in("v1@x.com", "p1")
    service.sign_in_access_only("v1@x.com", "p1")

    refreshed = service.refresh_tokens(user.id, user.email, pair.refresh_token)
    assert refreshed.refresh_token != pair.refresh_token
