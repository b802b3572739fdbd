# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import AccessToken, TokenClaims, TokenPair, User
from .users.exceptions import (
    InvalidCredentialsError,
    StoredHashCorruptedError,
    TokenInvalidError,
    UserAlreadyExistsError,
)

__all__ = [
    "AccessToken",
    "InvalidCredentialsError",
    "StoredHashCorruptedError",
    "TokenClaims",
    "TokenInvalidError",
    "TokenPair",
    "User",
    "UserAlreadyExistsError",
]
