"""Exception handler tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.hcen_auth.domain.exceptions import (
    AuthenticationError,
    AuthErrorKind,
    OAuthFailureSource,
)
from apps.hcen_auth.presentation.http.errors import register_exception_handlers
from apps.hcen_auth.presentation.http.errors.handlers import status_for_auth_error


class TestStatusForAuthError:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (AuthenticationError.invalid_state(), 401),
            (AuthenticationError.invalid_token(), 401),
            (AuthenticationError.token_expired(), 401),
            (AuthenticationError.generic(), 401),
            (AuthenticationError.invalid_request("bad"), 400),
            (AuthenticationError.pkce_mismatch(), 400),
            (AuthenticationError.oauth("upstream"), 502),
            (AuthenticationError.oauth("down", source=OAuthFailureSource.NETWORK), 502),
        ],
    )
    def test_mapping(self, error: AuthenticationError, status: int) -> None:
        assert status_for_auth_error(error) == status

    def test_every_kind_is_mapped(self) -> None:
        for kind in AuthErrorKind:
            assert status_for_auth_error(AuthenticationError(kind, "x")) != 500


class TestRegisteredHandlers:
    @pytest.fixture
    def client(self) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/auth-error")
        async def auth_error():
            raise AuthenticationError.oauth(
                "bad verifier",
                code="PKCE_VERIFIER_INVALID",
                source=OAuthFailureSource.LOCAL,
            )

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        return TestClient(app, raise_server_exceptions=False)

    def test_auth_error_body(self, client: TestClient) -> None:
        response = client.get("/auth-error")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "PKCE_VERIFIER_INVALID"
        assert body["message"] == "bad verifier"
        assert "timestamp" in body

    def test_unexpected_error_hides_details(self, client: TestClient) -> None:
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_ERROR"
        assert "secret" not in response.text
