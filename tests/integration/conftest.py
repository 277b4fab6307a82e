"""
Fixtures for integration tests
"""

import pytest
import httpx
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.core.dependencies import CurrentSession, get_github_client, get_http_client
from app.core.security import create_session_token
from app.services.github_client import GitHubClient


@pytest.fixture
async def client(fake_github):
    """
    HTTP client for testing API endpoints.

    GitHub is replaced by the fake: the session dependency still runs, only
    the outgoing transport is swapped.
    """
    async def override_github_client(session: CurrentSession):
        async with GitHubClient(session.access_token, transport=fake_github.transport) as github:
            yield github

    async def override_http_client():
        async with httpx.AsyncClient(transport=fake_github.transport) as http_client:
            yield http_client

    app.dependency_overrides[get_github_client] = override_github_client
    app.dependency_overrides[get_http_client] = override_http_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def session_token() -> str:
    return create_session_token("gho_test_token", "octocat")


@pytest.fixture
def auth_headers(session_token):
    """
    Provides authentication headers for protected endpoints.
    """
    return {"Authorization": f"Bearer {session_token}"}
