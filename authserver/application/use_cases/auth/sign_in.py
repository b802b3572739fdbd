# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authserver.application.services.token_signing import TokenIssuer
from authserver.domain.users.entities import AccessToken, TokenPair, User
from authserver.domain.users.exceptions import InvalidCredentialsError
from authserver.domain.users.repositories import PasswordHasher, UserRepository
from authserver.shared.logging import logger

from .common import store_refresh_token


class SignInUseCase:
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

    def _authenticate(self, email: str, password: str) -> User:
        user = self._users.find_by_email(email)
        if user is None:
            logger.warning("auth.sign_in: unknown email")
            raise InvalidCredentialsError("Email is not registered")

        if not self._password_hasher.verify(user.password_hash, password):
            logger.warning(f"auth.sign_in: wrong password user_id={user.id}")
            raise InvalidCredentialsError("Password is incorrect")

        return user

    def execute(self, email: str, password: str) -> TokenPair:
        user = self._authenticate(email, password)
        pair = self._tokens.issue_pair(user.id, user.email)
        store_refresh_token(self._users, self._password_hasher, user.id, pair.refresh_token)
        logger.info(f"auth.sign_in: ok user_id={user.id}")
        return pair

    def execute_access_only(self, email: str, password: str) -> AccessToken:
        user = self._authenticate(email, password)
        token = self._tokens.issue_access(user.id, user.email)
        logger.info(f"auth.sign_in.v1: ok user_id={user.id}")
        return token
