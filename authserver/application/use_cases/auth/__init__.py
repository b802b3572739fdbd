# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .log_out import LogOutUseCase
from .refresh_tokens import RefreshTokensUseCase
from .sign_in import SignInUseCase
from .sign_up import SignUpUseCase

__all__ = [
    "LogOutUseCase",
    "RefreshTokensUseCase",
    "SignInUseCase",
    "SignUpUseCase",
]
