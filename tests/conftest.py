"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings exige JWT_SECRET: lo defino antes de que se importe la app
os.environ.setdefault("JWT_SECRET", "test-secret-key-at-least-32-chars-long")
os.environ.setdefault("GITHUB_CLIENT_ID", "test-github-client-id")
os.environ.setdefault("GITHUB_CLIENT_SECRET", "test-github-client-secret")

import pytest
import httpx
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from app.core.config import get_settings


class FakeGitHub:
    """
    In-memory GitHub served through httpx.MockTransport.

    Paginated listings are registered as a list of pages per path; the
    `page` query param picks one (past the end -> empty page). Every request
    is recorded so tests can check what was asked for.
    """

    def __init__(self):
        self.pages: dict[str, list[list[dict[str, Any]]]] = {}
        self.errors: dict[tuple[str, int], tuple[int, dict[str, Any]]] = {}
        self.responses: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add_pages(self, path: str, pages: list[list[dict[str, Any]]]) -> None:
        self.pages[path] = pages

    def add_error(self, path: str, status_code: int, message: str, page: int = 1) -> None:
        self.errors[(path, page)] = (status_code, {"message": message})

    def add_json(self, method: str, path: str, body: Any, status_code: int = 200) -> None:
        self.responses[(method, path)] = (status_code, body)

    def pages_requested(self, path: str) -> list[int]:
        return [
            int(r.url.params.get("page", "1"))
            for r in self.requests
            if r.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if (request.method, path) in self.responses:
            status_code, body = self.responses[(request.method, path)]
            return httpx.Response(status_code, json=body)

        page = int(request.url.params.get("page", "1"))
        if (path, page) in self.errors:
            status_code, body = self.errors[(path, page)]
            return httpx.Response(status_code, json=body)

        if path not in self.pages:
            return httpx.Response(404, json={"message": "Not Found"})

        pages = self.pages[path]
        return httpx.Response(200, json=pages[page - 1] if page <= len(pages) else [])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Cada test lee la configuración desde cero"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def base_time() -> datetime:
    """Creation time of the newest PR in generated data."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def pr_payload():
    """Factory for GitHub pull objects as returned by /repos/{owner}/{repo}/pulls."""

    def _make(
        number: int,
        login: Optional[str],
        created_at: datetime,
        avatar_url: Optional[str] = None,
        state: str = "open",
        merged_at: Optional[datetime] = None,
    ) -> dict[str, Any]:
        user = None
        if login is not None:
            user = {
                "login": login,
                "avatar_url": avatar_url or f"https://avatars.example.com/{login}",
            }
        return {
            "number": number,
            "title": f"PR #{number}",
            "state": state,
            "user": user,
            "created_at": created_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "merged_at": merged_at.strftime("%Y-%m-%dT%H:%M:%SZ") if merged_at else None,
            "html_url": f"https://github.com/acme/widgets/pull/{number}",
        }

    return _make


@pytest.fixture
def pr_pages(pr_payload, base_time):
    """
    Factory that builds newest-first pages of PRs, one minute apart.

    pr_pages([100, 100, 37]) -> three pages with 237 PRs in total.
    """

    def _make(sizes: list[int], login: str = "octocat") -> list[list[dict[str, Any]]]:
        pages = []
        number = sum(sizes)
        offset = 0
        for size in sizes:
            page = []
            for _ in range(size):
                page.append(pr_payload(number, login, base_time - timedelta(minutes=offset)))
                number -= 1
                offset += 1
            pages.append(page)
        return pages

    return _make
