# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Explicit, versioned route table.

A request's API version comes from the ``v=`` parameter of its ``Accept``
media type (``Accept: application/json;v=2``). Every (method, path) pair is
registered once with Flask; the dispatcher picks the route for the requested
version, runs its guard and renders the handler's DTO with the route status.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from http import HTTPStatus

from flask import Flask, g, jsonify, request
from pydantic import BaseModel

from authserver.interfaces.http.guards import Authenticator, AuthStrategy
from authserver.shared.errors import RouteNotFoundError

VERSION_KEY = "v="

Handler = Callable[[], BaseModel]


@dataclass(slots=True, frozen=True)
class Route:
    method: str
    path: str
    version: str
    handler: Handler
    strategy: AuthStrategy = AuthStrategy.ACCESS
    status: HTTPStatus = HTTPStatus.OK


def extract_version(accept: str | None) -> str | None:
    if not accept:
        return None
    for media_range in accept.split(","):
        for param in media_range.split(";")[1:]:
            param = param.strip()
            if param.startswith(VERSION_KEY):
                return param[len(VERSION_KEY):].strip() or None
    return None


class RouteTable:
    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: dict[tuple[str, str, str], Route] = {}
        for route in routes:
            self.add(route)

    def add(self, route: Route) -> None:
        key = (route.method.upper(), route.path, route.version)
        if key in self._routes:
            raise ValueError(f"Duplicate route {route.method} {route.path} v{route.version}")
        self._routes[key] = route

    def resolve(self, method: str, path: str, version: str | None) -> Route | None:
        if version is None:
            return None
        return self._routes.get((method.upper(), path, version))

    def endpoints(self) -> list[tuple[str, str]]:
        return sorted({(method, path) for method, path, _ in self._routes})

    def __len__(self) -> int:
        return len(self._routes)


def register_routes(
    app: Flask,
    table: RouteTable,
    authenticator: Authenticator,
    *,
    default_version: str | None = None,
) -> None:
    for method, path in table.endpoints():
        app.add_url_rule(
            path,
            endpoint=f"{method.lower()}:{path}",
            view_func=_make_dispatcher(table, authenticator, method, path, default_version),
            methods=[method],
        )


def _make_dispatcher(
    table: RouteTable,
    authenticator: Authenticator,
    method: str,
    path: str,
    default_version: str | None,
):
    def dispatch():
        version = extract_version(request.headers.get("Accept")) or default_version
        route = table.resolve(method, path, version)
        if route is None:
            raise RouteNotFoundError(method, path, version)

        principal = authenticator.authenticate(route.strategy)
        g.principal = principal
        if principal is not None:
            g.user_id = principal.user_id

        payload = route.handler()
        return jsonify(payload.model_dump()), route.status

    return dispatch


__all__ = ["Route", "RouteTable", "extract_version", "register_routes"]
