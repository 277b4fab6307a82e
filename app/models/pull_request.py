from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel


class PullRequestRecord(BaseModel):
    """Pull request tal como lo reporta GitHub (solo los campos que usamos)"""

    number: int
    title: str
    state: Literal["open", "closed"]  # merged se infiere de merged_at

    # None si la cuenta del autor fue borrada (GitHub devuelve "user": null)
    author_login: Optional[str] = None
    author_avatar_url: Optional[str] = None

    created_at: datetime
    merged_at: Optional[datetime] = None
    html_url: str

    class Config:
        frozen = True

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> "PullRequestRecord":
        """Construye el record desde un objeto pull de la API REST de GitHub"""
        user = payload.get("user") or {}
        return cls(
            number=payload["number"],
            title=payload["title"],
            state=payload["state"],
            author_login=user.get("login"),
            author_avatar_url=user.get("avatar_url"),
            created_at=payload["created_at"],
            merged_at=payload.get("merged_at"),
            html_url=payload["html_url"],
        )
