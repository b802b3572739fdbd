from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from authserver.domain.users.entities import AccessToken, TokenPair
from authserver.shared.errors.validation import ValidationErrorType


class AuthRequestDTO(BaseModel):
    email: EmailStr
    password: str = Field(max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "Email cannot be empty",
                {}
            )
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_EMPTY,
                "Password cannot be empty",
                {}
            )
        return value


class TokenPairDTO(BaseModel):
    access_token: str
    refresh_token: str

    @classmethod
    def from_domain(cls, pair: TokenPair) -> TokenPairDTO:
        return cls(access_token=pair.access_token, refresh_token=pair.refresh_token)


class AccessTokenDTO(BaseModel):
    access_token: str

    @classmethod
    def from_domain(cls, token: AccessToken) -> AccessTokenDTO:
        return cls(access_token=token.access_token)


class LogoutResultDTO(BaseModel):
    statusCode: int = 200  # noqa: N815
    message: str = "Logout successful"
