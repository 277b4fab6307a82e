from typing import Optional
from pydantic import BaseModel


class GitHubSession(BaseModel):
    """Sesión autenticada: token de GitHub del usuario y su login"""

    access_token: str
    username: Optional[str] = None
