"""
GitHubClient - Thin async client over the GitHub REST API.

Every request carries the caller's access token. Listings are paginated
sequentially (one page at a time): GitHub rate-limits us and doesn't tell us
the total upfront, so there's no safe way to prefetch pages in parallel.
"""

import logging
from typing import Any, AsyncIterator, Optional

import httpx

from app.core.config import get_settings
from app.core.errors import GitHubApiError, InternalError

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"


class GitHubClient:
    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        per_page: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.per_page = per_page or settings.github_per_page
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.github_api_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": GITHUB_ACCEPT,
            },
            timeout=timeout or settings.github_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET a GitHub endpoint and return the decoded JSON body.

        Raises GitHubApiError with GitHub's status on any non-2xx response.
        """
        response = await self._client.get(path, params=params)

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"⚠️ GitHub {response.status_code} on {path}: {message}")
            raise GitHubApiError(response.status_code, f"GitHub API error: {message}")

        return response.json()

    async def iter_pages(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> AsyncIterator[list[dict[str, Any]]]:
        """
        Yield the raw pages of a paginated listing, starting at page 1.

        Stops on an empty page or on a page shorter than per_page. Callers may
        stop iterating earlier; no further page is requested in that case.
        """
        page = 1
        while True:
            page_params = {**(params or {}), "per_page": self.per_page, "page": page}
            logger.debug(f"GET {path} page={page}")
            data = await self.get_json(path, page_params)

            if not isinstance(data, list):
                raise InternalError(f"Unexpected GitHub response for {path}: expected a list")

            if not data:
                return

            yield data

            if len(data) < self.per_page:
                return
            page += 1


def _error_message(response: httpx.Response) -> str:
    """GitHub's own message if the body has one, else the HTTP reason phrase"""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or str(response.status_code)
