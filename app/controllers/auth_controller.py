"""
Controlador de autenticación - Login con GitHub y sesión actual
"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from app.core.dependencies import CurrentSession, HttpClient
from app.core.security import build_authorize_url
from app.services.auth_service import AuthService, AuthServiceError

router = APIRouter(prefix="/api/auth", tags=["auth"])

# Cuerpo del callback OAuth
class GitHubAuthRequest(BaseModel):
    code: str

# URL de autorización de GitHub
class LoginResponse(BaseModel):
    authorize_url: str

# Respuesta con JWT de sesión
class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: Optional[str] = None

# Sesión actual
class SessionResponse(BaseModel):
    username: Optional[str] = None


@router.get("/login", response_model=LoginResponse)
async def login(state: Optional[str] = Query(None, description="Opaque value echoed back by GitHub")):
    """
    Devuelve la URL de GitHub a la que el frontend debe redirigir al usuario.
    """
    return LoginResponse(authorize_url=build_authorize_url(state))


@router.post("/github", response_model=AuthResponse)
async def authenticate_github(
    request: GitHubAuthRequest,
    http_client: HttpClient
):
    """
    Autentica mediante GitHub OAuth.

    El frontend envía el `code` que GitHub le dio en el callback, el backend
    lo intercambia por un access token de GitHub y devuelve un JWT de sesión.
    """
    auth_service = AuthService(http_client)

    try:
        session, token = await auth_service.authenticate_with_github(request.code)
    except AuthServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )

    return AuthResponse(access_token=token, username=session.username)


@router.get("/session", response_model=SessionResponse)
async def get_session(session: CurrentSession):
    """
    Devuelve el usuario de la sesión actual.

    Requiere un JWT válido en la cabecera `Authorization`.
    """
    return SessionResponse(username=session.username)
