"""
Dependencies de FastAPI para la sesión y los clientes HTTP hacia GitHub
"""

from typing import Annotated, AsyncIterator, Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings
from app.core.errors import MissingCredentialError
from app.core.security import decode_session_token
from app.models.session import GitHubSession
from app.services.github_client import GitHubClient

# Esquema de seguridad: "Authorization: Bearer <jwt de sesión>"
# auto_error=False para devolver nuestro propio 401 con {"error": ...}
security = HTTPBearer(auto_error=False)


async def get_optional_session(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]
) -> Optional[GitHubSession]:
    """Sesión del request si hay un JWT válido, None si no"""
    if credentials is None:
        return None
    return decode_session_token(credentials.credentials)


async def get_current_session(
    session: Annotated[Optional[GitHubSession], Depends(get_optional_session)]
) -> GitHubSession:
    """
    Dependency que exige una sesión con token de GitHub.

    Sin sesión no se llega a hablar con GitHub: responde 401 directamente.
    """
    if session is None or not session.access_token:
        raise MissingCredentialError()
    return session


async def get_github_client(
    session: Annotated[GitHubSession, Depends(get_current_session)]
) -> AsyncIterator[GitHubClient]:
    """Cliente de GitHub autenticado con el token del usuario, cerrado al terminar el request"""
    async with GitHubClient(session.access_token) as client:
        yield client


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Cliente HTTP sin autenticar (para el intercambio OAuth)"""
    async with httpx.AsyncClient(timeout=get_settings().github_timeout_seconds) as client:
        yield client


# Alias de tipos para que se vea mas limpio en los endpoints
CurrentSession = Annotated[GitHubSession, Depends(get_current_session)]
GitHub = Annotated[GitHubClient, Depends(get_github_client)]
HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]
