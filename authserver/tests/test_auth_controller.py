from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from flask import Flask

from authserver.application.services.auth_service import AuthService
from authserver.application.services.token_signing import (
    JwtTokenSigner,
    TokenIssuer,
)
from authserver.domain.users.entities import AccessToken, TokenPair
from authserver.domain.users.exceptions import InvalidCredentialsError
from authserver.interfaces.http.controllers.auth_controller import AuthController
from authserver.interfaces.http.guards import Authenticator
from authserver.interfaces.http.routing import RouteTable, register_routes
from authserver.shared.middleware.error_handler import configure_error_handling

V1 = {"Accept": "application/json;v=1"}
V2 = {"Accept": "application/json;v=2"}


@pytest.fixture()
def issuer():
    issuer = TokenIssuer(
        access_signer=JwtTokenSigner("access-secret", ttl=900),
        refresh_signer=JwtTokenSigner("refresh-secret", ttl=604800),
    )
    yield issuer
    issuer.close()


@pytest.fixture()
def auth_service() -> MagicMock:
    service = MagicMock(spec=AuthService)
    service.sign_up.return_value = TokenPair(access_token="at", refresh_token="rt")
    service.sign_in.return_value = TokenPair(access_token="at2", refresh_token="rt2")
    service.refresh_tokens.return_value = TokenPair(access_token="at3", refresh_token="rt3")
    service.sign_up_access_only.return_value = AccessToken(access_token="legacy")
    service.sign_in_access_only.return_value = AccessToken(access_token="legacy2")
    return service


@pytest.fixture()
def flask_app(auth_service: MagicMock, issuer: TokenIssuer) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    controller = AuthController(auth_service=auth_service)
    register_routes(app, RouteTable(controller.routes()), Authenticator(issuer))
    return app


def test_v2_signup_returns_pair_with_201(flask_app: Flask, auth_service: MagicMock) -> None:
    with flask_app.test_client() as client:
        response = client.post(
            "/auth/signup", json={"email": " A@X.com ", "password": "p1"}, headers=V2
        )

    assert response.status_code == 201
    assert response.get_json() == {"access_token": "at", "refresh_token": "rt"}
    auth_service.sign_up.assert_called_once_with("a@x.com", "p1")


def test_signup_accepts_internationalised_email(
    flask_app: Flask, auth_service: MagicMock
) -> None:
    with flask_app.test_client() as client:
        response = client.post(
            "/auth/signup", json={"email": "Üser@bücher.example", "password": "p1"}, headers=V2
        )

    assert response.status_code == 201
    auth_service.sign_up.assert_called_once_with("üser@bücher.example", "p1")


def test_v1_signup_and_signin_return_access_token_only(
    flask_app: Flask, auth_service: MagicMock
) -> None:
    with flask_app.test_client() as client:
        signup = client.post("/auth/signup", json={"email": "a@x.com", "password": "p1"}, headers=V1)
        signin = client.post("/auth/signin", json={"email": "a@x.com", "password": "p1"}, headers=V1)

    assert signup.status_code == 201
    assert signup.get_json() == {"access_token": "legacy"}
    assert signin.status_code == 200
    assert signin.get_json() == {"access_token": "legacy2"}
    auth_service.sign_up.assert_not_called()
    auth_service.sign_in.assert_not_called()


def test_request_without_version_is_not_routed(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/auth/signin", json={"email": "a@x.com", "password": "p1"})

    assert response.status_code == 404
    assert response.get_json()["error"] == "route_not_found"


def test_logout_and_refresh_do_not_exist_in_v1(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/auth/logout", headers=V1)

    assert response.status_code == 404


@pytest.mark.parametrize(
    "body",
    [
        {"email": "not-an-email", "password": "p1"},
        {"email": "a@@x.com", "password": "p1"},
        {"email": "   ", "password": "p1"},
        {"email": 42, "password": "p1"},
        {"email": "a@x.com", "password": ""},
        {"email": "a@x.com"},
        {},
    ],
)
def test_invalid_credentials_payload_returns_400(
    flask_app: Flask, auth_service: MagicMock, body: dict
) -> None:
    with flask_app.test_client() as client:
        response = client.post("/auth/signin", json=body, headers=V2)

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"
    auth_service.sign_in.assert_not_called()


def test_signin_failure_maps_to_403(flask_app: Flask, auth_service: MagicMock) -> None:
    auth_service.sign_in.side_effect = InvalidCredentialsError("Password is incorrect")

    with flask_app.test_client() as client:
        response = client.post("/auth/signin", json={"email": "a@x.com", "password": "x"}, headers=V2)

    assert response.status_code == 403
    assert response.get_json() == {
        "statusCode": 403,
        "error": "invalid_credentials",
        "message": "Password is incorrect",
    }


def test_logout_requires_access_token(flask_app: Flask, auth_service: MagicMock) -> None:
    with flask_app.test_client() as client:
        response = client.post("/auth/logout", headers=V2)

    assert response.status_code == 401
    assert response.get_json()["error"] == "token_invalid"
    auth_service.log_out.assert_not_called()


def test_logout_with_access_token(
    flask_app: Flask, auth_service: MagicMock, issuer: TokenIssuer
) -> None:
    pair = issuer.issue_pair(3, "a@x.com")

    with flask_app.test_client() as client:
        response = client.post(
            "/auth/logout",
            headers={**V2, "Authorization": f"Bearer {pair.access_token}"},
        )

    assert response.status_code == 200
    assert response.get_json() == {"statusCode": 200, "message": "Logout successful"}
    auth_service.log_out.assert_called_once_with(3)


def test_logout_rejects_refresh_token(
    flask_app: Flask, auth_service: MagicMock, issuer: TokenIssuer
) -> None:
    pair = issuer.issue_pair(3, "a@x.com")

    with flask_app.test_client() as client:
        response = client.post(
            "/auth/logout",
            headers={**V2, "Authorization": f"Bearer {pair.refresh_token}"},
        )

    assert response.status_code == 401


def test_refresh_passes_presented_refresh_token(
    flask_app: Flask, auth_service: MagicMock, issuer: TokenIssuer
) -> None:
    pair = issuer.issue_pair(3, "a@x.com")

    with flask_app.test_client() as client:
        rejected = client.post(
            "/auth/refresh",
            headers={**V2, "Authorization": f"Bearer {pair.access_token}"},
        )
        accepted = client.post(
            "/auth/refresh",
            headers={**V2, "Authorization": f"Bearer {pair.refresh_token}"},
        )

    assert rejected.status_code == 401
    assert accepted.status_code == 200
    assert accepted.get_json() == {"access_token": "at3", "refresh_token": "rt3"}
    auth_service.refresh_tokens.assert_called_once_with(3, "a@x.com", pair.refresh_token)
