# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import g, request
from pydantic import ValidationError

from authserver.application.services.auth_service import AuthService
from authserver.interfaces.http.dto.auth import (
    AccessTokenDTO,
    AuthRequestDTO,
    LogoutResultDTO,
    TokenPairDTO,
)
from authserver.interfaces.http.guards import AuthStrategy, Principal
from authserver.interfaces.http.routing import Route
from authserver.shared.errors.validation import raise_validation_error


def _credentials() -> AuthRequestDTO:
    try:
        return AuthRequestDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


def _principal() -> Principal:
    principal: Principal | None = getattr(g, "principal", None)
    if principal is None:  # pragma: no cover - guarded routes always set it
        raise RuntimeError("guarded handler called without a principal")
    return principal


class AuthController:
    def __init__(self, *, auth_service: AuthService) -> None:
        self._auth = auth_service

    # v1: access token only

    def sign_up_v1(self) -> AccessTokenDTO:
        dto = _credentials()
        return AccessTokenDTO.from_domain(self._auth.sign_up_access_only(dto.email, dto.password))

    def sign_in_v1(self) -> AccessTokenDTO:
        dto = _credentials()
        return AccessTokenDTO.from_domain(self._auth.sign_in_access_only(dto.email, dto.password))

    # v2: token pair with rotation

    def sign_up(self) -> TokenPairDTO:
        dto = _credentials()
        return TokenPairDTO.from_domain(self._auth.sign_up(dto.email, dto.password))

    def sign_in(self) -> TokenPairDTO:
        dto = _credentials()
        return TokenPairDTO.from_domain(self._auth.sign_in(dto.email, dto.password))

    def log_out(self) -> LogoutResultDTO:
        self._auth.log_out(_principal().user_id)
        return LogoutResultDTO()

    def refresh(self) -> TokenPairDTO:
        principal = _principal()
        pair = self._auth.refresh_tokens(principal.user_id, principal.email, principal.token)
        return TokenPairDTO.from_domain(pair)

    def routes(self) -> list[Route]:
        public = AuthStrategy.PUBLIC
        return [
            Route("POST", "/auth/signup", "1", self.sign_up_v1, public, HTTPStatus.CREATED),
            Route("POST", "/auth/signin", "1", self.sign_in_v1, public, HTTPStatus.OK),
            Route("POST", "/auth/signup", "2", self.sign_up, public, HTTPStatus.CREATED),
            Route("POST", "/auth/signin", "2", self.sign_in, public, HTTPStatus.OK),
            Route("POST", "/auth/logout", "2", self.log_out, AuthStrategy.ACCESS, HTTPStatus.OK),
            Route("POST", "/auth/refresh", "2", self.refresh, AuthStrategy.REFRESH, HTTPStatus.OK),
        ]
