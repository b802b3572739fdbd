"""Use-case for ending a refresh session."""

from __future__ import annotations

from authserver.domain.users.repositories import UserRepository
from authserver.shared.logging import logger


class LogOutUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> None:
        cleared = self._users.clear_refresh_token_hash(user_id)
        logger.info(f"auth.log_out: ok user_id={user_id} cleared={cleared}")
