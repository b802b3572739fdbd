# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authserver.application.use_cases.auth import (
    LogOutUseCase,
    RefreshTokensUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from authserver.domain.users.entities import AccessToken, TokenPair


class AuthService:
    """Entry point for every authentication flow.

    Session state lives only in the user's stored refresh hash: ``None``
    means logged out, anything else is the hash of the one refresh token
    that may still be exchanged.
    """

    def __init__(
        self,
        *,
        sign_up: SignUpUseCase,
        sign_in: SignInUseCase,
        log_out: LogOutUseCase,
        refresh: RefreshTokensUseCase,
    ) -> None:
        self._sign_up = sign_up
        self._sign_in = sign_in
        self._log_out = log_out
        self._refresh = refresh

    def sign_up(self, email: str, password: str) -> TokenPair:
        return self._sign_up.execute(email, password)

    def sign_in(self, email: str, password: str) -> TokenPair:
        return self._sign_in.execute(email, password)

    def log_out(self, user_id: int) -> None:
        self._log_out.execute(user_id)

    def refresh_tokens(self, user_id: int, email: str, refresh_token: str) -> TokenPair:
        return self._refresh.execute(user_id, email, refresh_token)

    def sign_up_access_only(self, email: str, password: str) -> AccessToken:
        return self._sign_up.execute_access_only(email, password)

    def sign_in_access_only(self, email: str, password: str) -> AccessToken:
        return self._sign_in.execute_access_only(email, password)
