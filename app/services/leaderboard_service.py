"""
LeaderboardAggregator - Turns a list of pull requests into a ranked leaderboard.

Pure function of its input: no I/O, no shared state between calls.
"""

from typing import Iterable

from app.models.leaderboard import (
    ContributorEntry,
    LeaderboardResult,
    PullRequestSummary,
    RankedContributor,
)
from app.models.pull_request import PullRequestRecord

TOP_SCORE = 100


def calculate_score(rank: int, total_members: int) -> int:
    """
    Score for a leaderboard position.

    Rank 1 always gets 100, even when it's the only contributor. The rest get
    100 * (total_members - rank + 1) / total_members rounded half up, so with 8
    members rank 8 gets 12.5 -> 13. Integer arithmetic avoids float rounding
    surprises at the .5 boundary.
    """
    if rank == 1:
        return TOP_SCORE

    remaining = total_members - rank + 1
    return (2 * TOP_SCORE * remaining + total_members) // (2 * total_members)


class LeaderboardAggregator:
    def compute(self, records: Iterable[PullRequestRecord]) -> LeaderboardResult:
        """
        Group PRs by author and rank contributors by PR count.

        Records must come in fetch order (newest first): a contributor's avatar
        is the one on their first record seen, and ties keep the order in which
        contributors first appeared. PRs without an author count toward
        total_count but don't belong to anyone on the board.
        """
        contributors: dict[str, ContributorEntry] = {}
        total_count = 0

        for pr in records:
            total_count += 1
            username = pr.author_login
            if not username:
                continue

            entry = contributors.get(username)
            if entry is None:
                entry = ContributorEntry(username=username, avatar_url=pr.author_avatar_url or "")
                contributors[username] = entry

            entry.pull_request_count += 1
            entry.pull_requests.append(PullRequestSummary(
                number=pr.number,
                title=pr.title,
                state=pr.state,
                created_at=pr.created_at,
                merged_at=pr.merged_at,
                url=pr.html_url,
            ))

        # sorted() es estable: los empates quedan en orden de primera aparición
        ranked = sorted(contributors.values(), key=lambda e: e.pull_request_count, reverse=True)
        total_members = len(ranked)

        leaderboard = [
            RankedContributor(
                username=entry.username,
                pull_request_count=entry.pull_request_count,
                pull_requests=entry.pull_requests,
                avatar_url=entry.avatar_url,
                rank=idx + 1,
                score=calculate_score(idx + 1, total_members),
            )
            for idx, entry in enumerate(ranked)
        ]

        return LeaderboardResult(leaderboard=leaderboard, total_count=total_count)
