"""
Controlador de PRs - Leaderboard de contribuidores de un repositorio

Trae todos los PRs del repo desde GitHub (opcionalmente solo los creados desde
`since`) y arma el ranking en el momento. No se guarda nada entre requests.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import APIRouter, Query
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from app.core.dependencies import GitHub
from app.core.errors import ApiError, InternalError, InvalidRequestError
from app.models.leaderboard import RankedContributor
from app.services.leaderboard_service import LeaderboardAggregator
from app.services.pull_request_fetcher import PullRequestFetcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prs", tags=["prs"])

_datetime_adapter = TypeAdapter(datetime)


class LeaderboardResponse(BaseModel):
    """Leaderboard con totales y el `since` tal como vino en el request."""
    leaderboard: list[RankedContributor]
    total_prs: int = Field(alias="totalPRs")
    total_members: int = Field(alias="totalMembers")
    since: Optional[str] = None

    class Config:
        populate_by_name = True


def parse_since(since: Optional[str]) -> Optional[datetime]:
    """
    Parsea el `since` ISO-8601 del query string.

    Si viene sin zona horaria se asume UTC (GitHub trabaja en UTC).
    """
    if not since:
        return None
    try:
        parsed = _datetime_adapter.validate_python(since)
    except ValidationError:
        raise InvalidRequestError("Invalid since parameter")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@router.get("", response_model=LeaderboardResponse)
async def get_pr_leaderboard(
    github: GitHub,
    owner: Optional[str] = Query(None, description="Repository owner"),
    repo: Optional[str] = Query(None, description="Repository name"),
    since: Optional[str] = Query(None, description="Only PRs created at or after this ISO-8601 timestamp"),
):
    """
    Obtener el leaderboard de PRs de un repositorio.

    Errores: 401 sin sesión, 400 sin owner/repo, status de GitHub si GitHub
    falla, 500 para cualquier otro error.
    """
    if not owner or not repo:
        raise InvalidRequestError("Missing owner or repo parameters")

    since_dt = parse_since(since)

    try:
        prs = await PullRequestFetcher(github).fetch_all(owner, repo, since_dt)
        result = LeaderboardAggregator().compute(prs)
    except ApiError:
        raise
    except httpx.TimeoutException:
        raise ApiError("Timeout contacting GitHub", status_code=504)
    except httpx.RequestError as e:
        raise ApiError(f"Error contacting GitHub: {str(e)}", status_code=502)
    except Exception:
        logger.exception(f"Error fetching PRs for {owner}/{repo}")
        raise InternalError()

    return LeaderboardResponse(
        leaderboard=result.leaderboard,
        total_prs=result.total_count,
        total_members=result.total_members,
        since=since or None,
    )
