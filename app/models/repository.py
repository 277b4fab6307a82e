from typing import Any
from pydantic import BaseModel


class RepositorySummary(BaseModel):
    """Repositorio accesible por el usuario autenticado"""

    full_name: str
    name: str
    owner: str

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> "RepositorySummary":
        return cls(
            full_name=payload["full_name"],
            name=payload["name"],
            owner=payload["owner"]["login"],
        )
