"""
Controlador de repositorios - Repos accesibles por el usuario autenticado
"""

import logging

import httpx
from fastapi import APIRouter
from pydantic import BaseModel

from app.core.dependencies import GitHub
from app.core.errors import ApiError, InternalError
from app.models.repository import RepositorySummary
from app.services.repository_service import RepositoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/repositories", tags=["repositories"])


class RepositoriesResponse(BaseModel):
    repositories: list[RepositorySummary]


@router.get("", response_model=RepositoriesResponse)
async def list_repositories(github: GitHub):
    """
    Listar los repositorios del usuario, los actualizados más recientemente primero.
    """
    try:
        repositories = await RepositoryService(github).list_user_repositories()
    except ApiError:
        raise
    except httpx.TimeoutException:
        raise ApiError("Timeout contacting GitHub", status_code=504)
    except httpx.RequestError as e:
        raise ApiError(f"Error contacting GitHub: {str(e)}", status_code=502)
    except Exception:
        logger.exception("Error fetching repositories")
        raise InternalError()

    return RepositoriesResponse(repositories=repositories)
