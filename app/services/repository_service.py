"""
RepositoryService - Lists the repositories the authenticated user can access.
"""

import logging

from app.models.repository import RepositorySummary
from app.services.github_client import GitHubClient

logger = logging.getLogger(__name__)


class RepositoryService:
    def __init__(self, client: GitHubClient):
        self.client = client

    async def list_user_repositories(self) -> list[RepositorySummary]:
        """All repos of the current user, most recently updated first."""
        params = {"sort": "updated", "direction": "desc"}

        repositories: list[RepositorySummary] = []
        async for page in self.client.iter_pages("/user/repos", params):
            repositories.extend(RepositorySummary.from_github(item) for item in page)

        logger.info(f"Fetched {len(repositories)} repositories for current user")
        return repositories
