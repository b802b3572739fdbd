# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JWT signing for access and refresh tokens."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

import jwt

from authserver.domain.users.entities import AccessToken, TokenClaims, TokenPair
from authserver.domain.users.exceptions import TokenInvalidError
from authserver.domain.users.repositories import TokenSigner
from authserver.shared.logging import logger

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenKind(StrEnum):
    ACCESS = "access"
    REFRESH = "refresh"


class JwtTokenSigner(TokenSigner):
    def __init__(
        self,
        secret: str,
        *,
        ttl: int,
        algorithm: str = "HS256",
        clock: Clock = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("JwtTokenSigner requires a non-empty secret")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl(self) -> int:
        return self._ttl

    def sign(self, payload: dict[str, Any], ttl: int | None = None) -> str:
        issued_at = self._clock()
        expires_at = issued_at + timedelta(seconds=ttl if ttl is not None else self._ttl)
        claims = {
            **payload,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenInvalidError("Token has expired", context={"reason": "expired"}) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError("Invalid token", context={"reason": "invalid"}) from exc

        email = payload.get("email")
        try:
            subject = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise TokenInvalidError("Invalid token subject", context={"reason": "invalid"}) from exc
        if not isinstance(email, str) or not email:
            raise TokenInvalidError("Token has no email claim", context={"reason": "invalid"})

        return TokenClaims(
            sub=subject,
            email=email,
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
        )


class TokenIssuer:
    """Mints token pairs from two independent signers.

    Both halves of a pair are signed concurrently and the pair is returned
    only once both are done.
    """

    def __init__(
        self,
        *,
        access_signer: JwtTokenSigner,
        refresh_signer: JwtTokenSigner,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._signers = {
            TokenKind.ACCESS: access_signer,
            TokenKind.REFRESH: refresh_signer,
        }
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="token-signer"
        )

    def signer_for(self, kind: TokenKind) -> JwtTokenSigner:
        return self._signers[kind]

    def issue_pair(self, user_id: int, email: str) -> TokenPair:
        payload = {"sub": str(user_id), "email": email}
        access_future = self._executor.submit(self._signers[TokenKind.ACCESS].sign, payload)
        refresh_future = self._executor.submit(self._signers[TokenKind.REFRESH].sign, payload)
        pair = TokenPair(
            access_token=access_future.result(),
            refresh_token=refresh_future.result(),
        )
        logger.debug(f"tokens.issue_pair: user_id={user_id}")
        return pair

    def issue_access(self, user_id: int, email: str) -> AccessToken:
        token = self._signers[TokenKind.ACCESS].sign({"sub": str(user_id), "email": email})
        return AccessToken(access_token=token)

    def verify(self, kind: TokenKind, token: str) -> TokenClaims:
        return self._signers[kind].verify(token)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
