"""End-to-end tests for the OAuth login flow."""

from typing import Optional
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient
import pytest

from libre.adapter.github import GitHubOAuthClient
from libre.domain.error import InfrastructureError
from libre.domain.repository import CorrelationStore, UserRepository
from libre.domain.service.auth_service import correlation_key
from libre.domain.value import AuthProvider
from libre.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client backed by the mock container."""
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


def resolve(client: TestClient, container, dependency):
    """Fetch an APP-scoped dependency on the client's event loop."""
    return client.portal.call(container.get, dependency)


def begin_login(client: TestClient, provider: str = "github") -> str:
    response = client.get(f"/auth/{provider}", follow_redirects=False)
    assert response.status_code == 302
    return response.headers["X-CSRF-Token"]


def callback(client: TestClient, state: str, provider: str = "github", **params):
    params = {"state": state, "code": "good-code", **params}
    return client.get(
        f"/auth/{provider}/callback", params=params, follow_redirects=False
    )


class TestAuthFlow:
    """Scenarios A-D of the login flow."""

    def test_begin_login_redirects_with_recorded_state(self, client, container):
        """Redirect URL carries the state and the store holds exactly that key."""
        response = client.get("/auth/github", follow_redirects=False)

        assert response.status_code == 302
        state = response.headers["X-CSRF-Token"]
        location = urlparse(response.headers["Location"])
        assert location.netloc == "github.com"
        assert parse_qs(location.query)["state"] == [state]
        assert "code_challenge" in parse_qs(location.query)

        store = resolve(client, container, CorrelationStore)
        assert correlation_key(AuthProvider.GITHUB, state) in store
        assert len(store) == 1

    def test_callback_creates_account_and_sets_session(self, client, container):
        state = begin_login(client)

        response = callback(client, state)

        assert response.status_code == 303
        assert response.headers["Location"] == "http://localhost:3000"
        body = response.json()
        assert body["user"]["github_id"] == "abc123"
        assert body["user"]["login"] == "mockuser"
        assert body["token"]
        assert body["expires_at"]
        assert "auth_token=" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()

        store = resolve(client, container, CorrelationStore)
        assert correlation_key(AuthProvider.GITHUB, state) not in store

        me = client.get("/auth/me").json()
        assert me["authenticated"] is True
        assert me["user"]["id"] == body["user"]["id"]

    def test_replayed_callback_is_rejected(self, client):
        state = begin_login(client)
        first = callback(client, state)

        replay = callback(client, state)

        assert replay.status_code == 400
        assert replay.json() == {
            "error": "client",
            "detail": "Invalid or expired request",
        }
        # First login still holds
        me = client.get("/auth/me").json()
        assert me["authenticated"] is True
        assert me["user"]["id"] == first.json()["user"]["id"]

    def test_second_login_reuses_account(self, client, container):
        first = callback(client, begin_login(client))
        second = callback(client, begin_login(client))

        assert second.status_code == 303
        assert second.json()["user"]["id"] == first.json()["user"]["id"]
        assert second.json()["token"]
        assert len(resolve(client, container, UserRepository)) == 1


class TestCallbackFailures:
    def test_unknown_state(self, client, container):
        response = callback(client, "never-issued")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired request"
        assert "set-cookie" not in response.headers
        assert len(resolve(client, container, UserRepository)) == 0

    def test_missing_state(self, client):
        response = client.get(
            "/auth/github/callback", params={"code": "c"}, follow_redirects=False
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing state parameter"

    def test_non_bearer_token(self, client, container):
        response = callback(client, begin_login(client), code="mac")

        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported token type"
        github_client = resolve(client, container, Optional[GitHubOAuthClient])
        assert github_client.profile_requests == 0

    def test_rejected_code(self, client):
        response = callback(client, begin_login(client), code="invalid")

        assert response.status_code == 400
        assert response.json()["error"] == "client"

    def test_provider_error_consumes_state(self, client, container):
        state = begin_login(client)

        response = client.get(
            "/auth/github/callback",
            params={
                "state": state,
                "error": "access_denied",
                "error_description": "The user has denied your application access.",
            },
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "The user has denied your application access."
        )
        store = resolve(client, container, CorrelationStore)
        assert correlation_key(AuthProvider.GITHUB, state) not in store

    def test_profile_without_email(self, client):
        response = callback(client, begin_login(client), code="no-email")

        assert response.status_code == 303
        assert response.json()["user"]["email"] == ""


class TestCasdoorFlow:
    def test_casdoor_login(self, client):
        state = begin_login(client, "casdoor")

        response = callback(client, state, provider="casdoor")

        assert response.status_code == 303
        assert response.json()["user"]["casdoor_id"] == "casdoor-mock-1"

    def test_casdoor_state_at_github_callback(self, client, container):
        state = begin_login(client, "casdoor")

        response = callback(client, state, provider="github")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired request"
        assert "set-cookie" not in response.headers
        assert len(resolve(client, container, UserRepository)) == 0

        # The state still completes at its own provider
        assert callback(client, state, provider="casdoor").status_code == 303


class TestStorageFailure:
    def test_failed_sign_up_returns_503_without_session(
        self, client, container, monkeypatch
    ):
        user_repository = resolve(client, container, UserRepository)
        monkeypatch.setattr(
            user_repository,
            "create",
            AsyncMock(side_effect=InfrastructureError("User insert failed")),
        )

        response = callback(client, begin_login(client))

        assert response.status_code == 503
        assert response.json()["error"] == "infrastructure"
        assert "token" not in response.json()
        assert "set-cookie" not in response.headers
        assert client.get("/auth/me").json()["authenticated"] is False


class TestSessionRoutes:
    def test_me_without_cookie(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_logout_clears_cookie(self, client):
        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "auth_token" in response.headers.get("set-cookie", "")

    def test_health_lists_enabled_providers(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["providers"] == ["github", "casdoor"]


class TestDisabledProvider:
    def test_provider_without_credentials_has_no_routes(self, monkeypatch):
        monkeypatch.delenv("AUTH__CASDOOR__CLIENT_ID")
        monkeypatch.delenv("AUTH__CASDOOR__CLIENT_SECRET")

        with TestClient(create_app(container=build_test_container())) as client:
            assert client.get("/auth/casdoor", follow_redirects=False).status_code == 404
            assert (
                client.get(
                    "/auth/casdoor/callback",
                    params={"state": "s", "code": "c"},
                    follow_redirects=False,
                ).status_code
                == 404
            )
            assert client.get("/auth/github", follow_redirects=False).status_code == 302
