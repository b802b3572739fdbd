# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, Protocol

from .entities import TokenClaims, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, email: str, password_hash: str) -> User: ...
    def set_refresh_token_hash(self, user_id: int, token_hash: str) -> None: ...
    def clear_refresh_token_hash(self, user_id: int) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, hashed: str, password: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, payload: dict[str, Any], ttl: int | None = None) -> str: ...
    def verify(self, token: str) -> TokenClaims: ...
