# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authserver.domain.users.repositories import PasswordHasher, UserRepository


def store_refresh_token(
    users: UserRepository,
    password_hasher: PasswordHasher,
    user_id: int,
    refresh_token: str,
) -> None:
    """Persist only the slow hash of ``refresh_token``, replacing any previous one."""
    users.set_refresh_token_hash(user_id, password_hasher.hash(refresh_token))
