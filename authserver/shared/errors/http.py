# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from .base import AppError, ErrorKind
from authserver.shared.logging import logger

# Duplicate email keeps the legacy 403 rather than 409.
STATUS_BY_KIND = MappingProxyType(
    {
        ErrorKind.CONFLICT: HTTPStatus.FORBIDDEN,
        ErrorKind.INVALID_CREDENTIALS: HTTPStatus.FORBIDDEN,
        ErrorKind.TOKEN_INVALID: HTTPStatus.UNAUTHORIZED,
        ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
        ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
        ErrorKind.INTEGRITY: HTTPStatus.INTERNAL_SERVER_ERROR,
        ErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
    }
)


def status_for(kind: ErrorKind) -> HTTPStatus:
    return STATUS_BY_KIND[kind]


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    status = status_for(error.kind)
    response = jsonify({"statusCode": int(status), **error.to_dict()})
    return response, status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        status = status_for(exc.kind)
        if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} on {request.method} {request.path}")
        else:
            logger.warning(
                f"Handled application error {exc.code} on {request.method} {request.path}"
            )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        status = exc.code or int(default_status)
        payload = {
            "statusCode": status,
            "error": (exc.name or "http_error").lower().replace(" ", "_"),
            "message": exc.description,
        }
        return jsonify(payload), status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        ip_address = (
            request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
            if request.headers.get("X-Forwarded-For")
            else (request.remote_addr or "unknown")
        )
        user_id = getattr(g, "user_id", None)

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {ip_address}, user={user_id}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"statusCode": int(default_status), "error": "internal_error"})
        return response, default_status


__all__ = ["STATUS_BY_KIND", "handle_app_error", "register_error_handler", "status_for"]
