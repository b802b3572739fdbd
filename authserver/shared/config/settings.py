# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_MIN_PRODUCTION_SECRET_LENGTH = 32

# Every section reads its own variables from the environment / .env file.
_SECTION_SETTINGS = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///auth.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_SETTINGS


class JwtConfig(BaseSettings):
    # No defaults: both secrets must be supplied by the environment.
    access_secret: str = Field(alias="JWT_SECRET", min_length=1)
    refresh_secret: str = Field(alias="REFRESH_SECRET", min_length=1)
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_ttl: int = Field(60 * 15, ge=1, alias="ACCESS_TOKEN_TTL")
    refresh_ttl: int = Field(60 * 60 * 24 * 7, ge=1, alias="REFRESH_TOKEN_TTL")

    model_config = _SECTION_SETTINGS

    @model_validator(mode="after")
    def _secrets_must_differ(self) -> "JwtConfig":
        if self.access_secret == self.refresh_secret:
            raise ValueError("JWT_SECRET and REFRESH_SECRET must be different")
        return self


class HashingConfig(BaseSettings):
    time_cost: int = Field(3, ge=1, alias="ARGON2_TIME_COST")
    memory_cost: int = Field(65536, ge=8, alias="ARGON2_MEMORY_COST")
    parallelism: int = Field(4, ge=1, alias="ARGON2_PARALLELISM")

    model_config = _SECTION_SETTINGS


class ApiConfig(BaseSettings):
    default_version: str | None = Field(None, alias="API_DEFAULT_VERSION")

    model_config = _SECTION_SETTINGS


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_SETTINGS

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _jwt_config_factory() -> JwtConfig:
    return JwtConfig()  # type: ignore[call-arg]


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _hashing_config_factory() -> HashingConfig:
    return HashingConfig()  # type: ignore[call-arg]


def _api_config_factory() -> ApiConfig:
    return ApiConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    jwt: JwtConfig = Field(default_factory=_jwt_config_factory)
    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    hashing: HashingConfig = Field(default_factory=_hashing_config_factory)
    api: ApiConfig = Field(default_factory=_api_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        for name, secret in (
            ("JWT_SECRET", self.jwt.access_secret),
            ("REFRESH_SECRET", self.jwt.refresh_secret),
        ):
            if len(secret) < _MIN_PRODUCTION_SECRET_LENGTH:
                raise ValueError(
                    f"{name} must be at least {_MIN_PRODUCTION_SECRET_LENGTH} "
                    "characters in production"
                )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "ApiConfig",
    "AppConfig",
    "DatabaseConfig",
    "HashingConfig",
    "JwtConfig",
    "SecurityConfig",
    "load_config",
]
