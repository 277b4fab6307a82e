"""
Controlador de salud - Endpoint de comprobación del servicio
"""

from fastapi import APIRouter
from pydantic import BaseModel

from app.core.config import get_settings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Respuesta del chequeo de estado."""
    status: str
    github_api: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Endpoint de verificación de estado.

    No consulta GitHub: solo confirma que la API está levantada y a qué API apunta.
    """
    return HealthResponse(
        status="ok",
        github_api=get_settings().github_api_url
    )
