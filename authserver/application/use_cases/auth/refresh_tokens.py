# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authserver.application.services.token_signing import TokenIssuer
from authserver.domain.users.entities import TokenPair
from authserver.domain.users.exceptions import InvalidCredentialsError
from authserver.domain.users.repositories import PasswordHasher, UserRepository
from authserver.shared.logging import logger

from .common import store_refresh_token


class RefreshTokensUseCase:
    """Exchange a live refresh token for a new pair, invalidating the old one."""

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

    def execute(self, user_id: int, email: str, refresh_token: str) -> TokenPair:
        user = self._users.find_by_id(user_id)
        if user is None or user.email != email:
            logger.warning(f"auth.refresh: unknown user_id={user_id}")
            raise InvalidCredentialsError("User is not registered")

        if user.refresh_token_hash is None:
            logger.warning(f"auth.refresh: no active session user_id={user_id}")
            raise InvalidCredentialsError("Refresh token is expired")

        if not self._password_hasher.verify(user.refresh_token_hash, refresh_token):
            logger.warning(f"auth.refresh: token mismatch user_id={user_id}")
            raise InvalidCredentialsError("Refresh token is not valid")

        pair = self._tokens.issue_pair(user.id, user.email)
        store_refresh_token(self._users, self._password_hasher, user.id, pair.refresh_token)
        logger.info(f"auth.refresh: ok user_id={user.id}")
        return pair
