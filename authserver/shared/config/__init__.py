# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    ApiConfig,
    AppConfig,
    DatabaseConfig,
    HashingConfig,
    JwtConfig,
    SecurityConfig,
    load_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "DatabaseConfig",
    "HashingConfig",
    "JwtConfig",
    "SecurityConfig",
    "load_config",
]
