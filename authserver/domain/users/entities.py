# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    password_hash: str
    refresh_token_hash: str | None
    created_at: datetime

    @property
    def is_logged_in(self) -> bool:
        return self.refresh_token_hash is not None


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Verified JWT payload; ``sub`` is the user id."""

    sub: int
    email: str
    iat: int
    exp: int


@dataclass(slots=True, frozen=True)
class TokenPair:

    access_token: str
    refresh_token: str


@dataclass(slots=True, frozen=True)
class AccessToken:

    access_token: str
