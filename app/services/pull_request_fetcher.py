"""
PullRequestFetcher - Retrieves every relevant pull request of a repository.

Pages are requested newest-first (sort=created, direction=desc). With a
`since` bound, the first page that contains an older PR is the last page we
request: everything after it is older still, as long as GitHub keeps its sort
order. If GitHub ever returns a page out of order the result is silently
short; we log a warning when we notice but keep the same stopping rule.
"""

import logging
from datetime import datetime
from typing import Optional

from app.models.pull_request import PullRequestRecord
from app.services.github_client import GitHubClient

logger = logging.getLogger(__name__)


class PullRequestFetcher:
    def __init__(self, client: GitHubClient):
        self.client = client

    async def fetch_all(
        self,
        owner: str,
        repo: str,
        since: Optional[datetime] = None,
    ) -> list[PullRequestRecord]:
        """
        Fetch all pull requests of owner/repo, optionally only those created at or after `since`.

        Returns records in fetch order (newest first).
        Raises GitHubApiError on the first non-2xx page; nothing partial is returned.
        """
        path = f"/repos/{owner}/{repo}/pulls"
        params = {"state": "all", "sort": "created", "direction": "desc"}

        prs: list[PullRequestRecord] = []
        pages = 0
        previous: Optional[PullRequestRecord] = None

        async for raw_page in self.client.iter_pages(path, params):
            pages += 1
            page = [PullRequestRecord.from_github(item) for item in raw_page]

            if not _is_newest_first(([previous] if previous is not None else []) + page):
                logger.warning(
                    f"⚠️ {owner}/{repo} page {pages} is not sorted by created_at desc; "
                    f"results filtered by since may be incomplete"
                )
            previous = page[-1]

            if since is None:
                prs.extend(page)
                continue

            filtered = [pr for pr in page if pr.created_at >= since]
            prs.extend(filtered)

            # Una PR más vieja que since en esta página => las siguientes también lo son
            if len(filtered) < len(page):
                break

        logger.info(f"Fetched {len(prs)} PRs from {owner}/{repo} in {pages} page(s)")
        return prs


def _is_newest_first(page: list[PullRequestRecord]) -> bool:
    return all(a.created_at >= b.created_at for a, b in zip(page, page[1:]))
