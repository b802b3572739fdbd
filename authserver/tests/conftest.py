from __future__ import annotations

from pathlib import Path

import pytest

from authserver.shared.config import (
    AppConfig,
    DatabaseConfig,
    HashingConfig,
    JwtConfig,
)

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


@pytest.fixture()
def jwt_config() -> JwtConfig:
    return JwtConfig(JWT_SECRET=ACCESS_SECRET, REFRESH_SECRET=REFRESH_SECRET)


@pytest.fixture()
def fast_hashing() -> HashingConfig:
    return HashingConfig(ARGON2_TIME_COST=1, ARGON2_MEMORY_COST=8, ARGON2_PARALLELISM=1)


@pytest.fixture()
def app_config(tmp_path: Path, jwt_config: JwtConfig, fast_hashing: HashingConfig) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        jwt=jwt_config,
        hashing=fast_hashing,
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'auth.db'}"),
    )
