# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token guards selecting which secret a request must verify against."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from flask import request

from authserver.application.services.token_signing import TokenIssuer, TokenKind
from authserver.domain.users.exceptions import TokenInvalidError
from authserver.shared.logging import logger


class AuthStrategy(StrEnum):
    PUBLIC = "public"
    ACCESS = "access"
    REFRESH = "refresh"

    @property
    def token_kind(self) -> TokenKind | None:
        if self is AuthStrategy.ACCESS:
            return TokenKind.ACCESS
        if self is AuthStrategy.REFRESH:
            return TokenKind.REFRESH
        return None


@dataclass(slots=True, frozen=True)
class Principal:
    user_id: int
    email: str
    token: str


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


class Authenticator:
    def __init__(self, tokens: TokenIssuer) -> None:
        self._tokens = tokens

    def authenticate(self, strategy: AuthStrategy) -> Principal | None:
        kind = strategy.token_kind
        if kind is None:
            return None

        token = _bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} (strategy={strategy})"
            )
            raise TokenInvalidError("Missing bearer token", context={"reason": "missing"})

        try:
            claims = self._tokens.verify(kind, token)
        except TokenInvalidError:
            logger.warning(
                f"Auth failed on {request.method} {request.path} (strategy={strategy})"
            )
            raise

        logger.debug(f"Auth OK: user={claims.sub} {request.method} {request.path}")
        return Principal(user_id=claims.sub, email=claims.email, token=token)


__all__ = ["AuthStrategy", "Authenticator", "Principal"]
