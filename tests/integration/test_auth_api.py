"""
Integration tests for auth and health endpoints
"""

import pytest


class TestAuthEndpoints:
    """Test suite for /api/auth endpoints."""

    @pytest.mark.asyncio
    async def test_login_returns_authorize_url(self, client):
        response = await client.get("/api/auth/login?state=abc")

        assert response.status_code == 200
        url = response.json()["authorize_url"]
        assert url.startswith("https://github.com/login/oauth/authorize?")
        assert "state=abc" in url

    @pytest.mark.asyncio
    async def test_github_callback_issues_session(self, client, fake_github):
        fake_github.add_json("POST", "/login/oauth/access_token", {"access_token": "gho_new"})
        fake_github.add_json("GET", "/user", {"login": "octocat"})

        response = await client.post("/api/auth/github", json={"code": "the-code"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["username"] == "octocat"

        # El JWT recién emitido sirve como sesión
        session = await client.get(
            "/api/auth/session",
            headers={"Authorization": f"Bearer {data['access_token']}"},
        )
        assert session.status_code == 200
        assert session.json() == {"username": "octocat"}

    @pytest.mark.asyncio
    async def test_github_callback_bad_code(self, client, fake_github):
        fake_github.add_json("POST", "/login/oauth/access_token", {"error": "bad_verification_code"})

        response = await client.post("/api/auth/github", json={"code": "stale"})

        assert response.status_code == 401
        assert response.json() == {"error": "bad_verification_code"}

    @pytest.mark.asyncio
    async def test_github_callback_without_code(self, client):
        response = await client.post("/api/auth/github", json={})

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_session_requires_token(self, client):
        response = await client.get("/api/auth/session")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


class TestHealthEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "github_api": "https://api.github.com"}

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "PR Leaderboard API"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_format(self, client):
        response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestLoginWithoutUsername:
    @pytest.mark.asyncio
    async def test_session_works_when_user_lookup_fails(self, client, fake_github):
        """Login succeeds without a username and the session still reaches GitHub."""
        fake_github.add_json("POST", "/login/oauth/access_token", {"access_token": "gho_new"})
        fake_github.add_json("GET", "/user", {"message": "Server Error"}, status_code=502)
        fake_github.add_pages("/repos/acme/widgets/pulls", [])

        login = await client.post("/api/auth/github", json={"code": "the-code"})

        assert login.status_code == 200
        assert login.json()["username"] is None

        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
        response = await client.get("/api/prs?owner=acme&repo=widgets", headers=headers)

        assert response.status_code == 200
        assert response.json()["totalPRs"] == 0
        assert fake_github.requests[-1].headers["Authorization"] == "Bearer gho_new"
