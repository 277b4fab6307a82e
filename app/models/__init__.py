from .session import GitHubSession
from .pull_request import PullRequestRecord
from .repository import RepositorySummary
from .leaderboard import (
    PullRequestSummary,
    ContributorEntry,
    RankedContributor,
    LeaderboardResult,
)

__all__ = [
    "GitHubSession",
    "PullRequestRecord",
    "RepositorySummary",
    "PullRequestSummary",
    "ContributorEntry",
    "RankedContributor",
    "LeaderboardResult",
]
