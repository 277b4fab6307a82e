from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class PullRequestSummary(BaseModel):
    """Resumen de un PR dentro de la entrada de un contribuidor"""

    number: int
    title: str
    state: str
    created_at: datetime
    merged_at: Optional[datetime] = None
    url: str


class ContributorEntry(BaseModel):
    """Acumulador por contribuidor (se va llenando durante la agregación)"""

    username: str
    pull_request_count: int = Field(0, alias="count")
    pull_requests: list[PullRequestSummary] = Field(default_factory=list, alias="prs")

    # Avatar del primer PR visto (el más reciente), "" si nunca vino
    avatar_url: str = Field("", alias="avatar")

    class Config:
        populate_by_name = True


class RankedContributor(ContributorEntry):
    """Entrada final del leaderboard"""

    pull_request_count: int = Field(ge=1, alias="count")
    rank: int = Field(ge=1)  # 1 = más PRs
    score: int = Field(ge=0, le=100)

    class Config:
        populate_by_name = True
        frozen = True


class LeaderboardResult(BaseModel):
    """Resultado de la agregación"""

    leaderboard: list[RankedContributor]
    total_count: int  # Todos los PRs, incluidos los que no tienen autor

    @property
    def total_members(self) -> int:
        return len(self.leaderboard)
