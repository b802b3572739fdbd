# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.auth_service import AuthService
from .services.password_hashing import Argon2PasswordHasher
from .services.token_signing import JwtTokenSigner, TokenIssuer, TokenKind

__all__ = [
    "Argon2PasswordHasher",
    "AuthService",
    "JwtTokenSigner",
    "TokenIssuer",
    "TokenKind",
]
