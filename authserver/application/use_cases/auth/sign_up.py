# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authserver.application.services.token_signing import TokenIssuer
from authserver.domain.users.entities import AccessToken, TokenPair, User
from authserver.domain.users.exceptions import UserAlreadyExistsError
from authserver.domain.users.repositories import PasswordHasher, UserRepository
from authserver.shared.logging import logger

from .common import store_refresh_token


class SignUpUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens

    def _create_user(self, email: str, password: str) -> User:
        if self._users.find_by_email(email) is not None:
            raise UserAlreadyExistsError("Email is already in use")
        hashed = self._password_hasher.hash(password)
        return self._users.add(email, hashed)

    def execute(self, email: str, password: str) -> TokenPair:
        user = self._create_user(email, password)
        pair = self._tokens.issue_pair(user.id, user.email)
        store_refresh_token(self._users, self._password_hasher, user.id, pair.refresh_token)
        logger.info(f"auth.sign_up: ok user_id={user.id}")
        return pair

    def execute_access_only(self, email: str, password: str) -> AccessToken:
        user = self._create_user(email, password)
        token = self._tokens.issue_access(user.id, user.email)
        logger.info(f"auth.sign_up.v1: ok user_id={user.id}")
        return token
