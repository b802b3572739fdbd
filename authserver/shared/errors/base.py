# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, cast


class ErrorKind(StrEnum):
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_INVALID = "token_invalid"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INTEGRITY = "integrity"
    INTERNAL = "internal"


@dataclass(slots=True)
class AppError(Exception):
    code: str
    kind: ErrorKind
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        kind: ErrorKind | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_kind = kind or cast(
            ErrorKind, getattr(self, "kind", ErrorKind.VALIDATION)
        )
        super().__init__(
            code=resolved_code,
            kind=resolved_kind,
            message=message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code, kind=ErrorKind.INTERNAL, message=message, context=context
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            kind=ErrorKind.VALIDATION,
            message=message,
            context=context,
        )


class RouteNotFoundError(AppError):
    def __init__(self, method: str, path: str, version: str | None) -> None:
        super().__init__(
            code="route_not_found",
            kind=ErrorKind.NOT_FOUND,
            message=f"Cannot {method} {path}",
            context={"version": version},
        )
