# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from authserver.application.services.auth_service import AuthService
from authserver.application.services.password_hashing import Argon2PasswordHasher
from authserver.application.services.token_signing import JwtTokenSigner, TokenIssuer
from authserver.application.use_cases.auth import (
    LogOutUseCase,
    RefreshTokensUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from authserver.infrastructure.db import build_engine, build_session_factory
from authserver.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authserver.interfaces.http.controllers.auth_controller import AuthController
from authserver.interfaces.http.controllers.misc_controller import MiscController
from authserver.interfaces.http.guards import Authenticator
from authserver.shared.config import AppConfig


class Container:
    """Builds every collaborator once from an explicit config."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> Argon2PasswordHasher:
        hashing = self.config.hashing
        return Argon2PasswordHasher(
            time_cost=hashing.time_cost,
            memory_cost=hashing.memory_cost,
            parallelism=hashing.parallelism,
        )

    @cached_property
    def access_token_signer(self) -> JwtTokenSigner:
        jwt_config = self.config.jwt
        return JwtTokenSigner(
            jwt_config.access_secret,
            ttl=jwt_config.access_ttl,
            algorithm=jwt_config.algorithm,
        )

    @cached_property
    def refresh_token_signer(self) -> JwtTokenSigner:
        jwt_config = self.config.jwt
        return JwtTokenSigner(
            jwt_config.refresh_secret,
            ttl=jwt_config.refresh_ttl,
            algorithm=jwt_config.algorithm,
        )

    @cached_property
    def token_issuer(self) -> TokenIssuer:
        return TokenIssuer(
            access_signer=self.access_token_signer,
            refresh_signer=self.refresh_token_signer,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def sign_up_use_case(self) -> SignUpUseCase:
        return SignUpUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def sign_in_use_case(self) -> SignInUseCase:
        return SignInUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def log_out_use_case(self) -> LogOutUseCase:
        return LogOutUseCase(users=self.user_repository)

    @cached_property
    def refresh_tokens_use_case(self) -> RefreshTokensUseCase:
        return RefreshTokensUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def auth_service(self) -> AuthService:
        return AuthService(
            sign_up=self.sign_up_use_case,
            sign_in=self.sign_in_use_case,
            log_out=self.log_out_use_case,
            refresh=self.refresh_tokens_use_case,
        )

    @cached_property
    def authenticator(self) -> Authenticator:
        return Authenticator(self.token_issuer)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(auth_service=self.auth_service)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)

    def close(self) -> None:
        if "token_issuer" in self.__dict__:
            self.token_issuer.close()
        if "engine" in self.__dict__:
            self.engine.dispose()
