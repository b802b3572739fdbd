# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authserver.shared.errors.base import DomainError, ErrorKind


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    kind = ErrorKind.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    kind = ErrorKind.INVALID_CREDENTIALS


class TokenInvalidError(DomainError):
    code = "token_invalid"
    kind = ErrorKind.TOKEN_INVALID


class StoredHashCorruptedError(DomainError):
    code = "stored_hash_corrupted"
    kind = ErrorKind.INTEGRITY
