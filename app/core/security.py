"""
Seguridad: tokens de sesión (JWT) y OAuth de GitHub
"""

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx
from jose import JWTError, jwe, jwt
from jose.exceptions import JWEError

from app.core.config import get_settings
from app.models.session import GitHubSession

logger = logging.getLogger(__name__)


class GitHubOAuthError(Exception):
    """Se lanza cuando GitHub rechaza el intercambio del código OAuth"""
    pass


def build_authorize_url(state: str | None = None) -> str:
    """URL a la que el frontend redirige al usuario para autorizar la app"""
    settings = get_settings()
    params = {"client_id": settings.github_client_id, "scope": "read:user repo"}
    if state:
        params["state"] = state
    return str(httpx.URL(f"{settings.github_oauth_url}/authorize", params=params))


async def exchange_github_code(code: str, client: httpx.AsyncClient) -> str:
    """
    Intercambia el `code` del callback OAuth por un access token de GitHub

    Lanza GitHubOAuthError si algo está mal
    """
    settings = get_settings()

    response = await client.post(
        f"{settings.github_oauth_url}/access_token",
        data={
            "client_id": settings.github_client_id,
            "client_secret": settings.github_client_secret or "",
            "code": code,
        },
        headers={"Accept": "application/json"},
    )

    if response.status_code != 200:
        error_msg = f"GitHub OAuth falló. Status: {response.status_code}"
        logger.error(f"❌ {error_msg}")
        raise GitHubOAuthError(error_msg)

    data = response.json()
    # GitHub responde 200 incluso cuando el code es inválido, con un campo "error"
    access_token = data.get("access_token")
    if not access_token:
        error_msg = data.get("error_description") or data.get("error") or "No access token returned"
        logger.error(f"❌ {error_msg}")
        raise GitHubOAuthError(error_msg)

    return access_token


def create_session_token(access_token: str, username: Optional[str]) -> str:
    """
    Crea el JWT de sesión que el frontend manda en cada request

    Lleva el login de GitHub (login, puede ser None) y el access token de
    GitHub cifrado con JWE (gh_token): el JWT solo va firmado y cualquiera
    que lo tenga puede leer sus claims.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "login": username,
        "gh_token": _encrypt_github_token(access_token),
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
        "iat": now,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> Optional[GitHubSession]:
    """
    Decodifica y valida el JWT de sesión

    Retorna la sesión si es válido, None si está expirado, corrupto o sin token de GitHub
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    encrypted = payload.get("gh_token")
    if not encrypted:
        return None

    try:
        access_token = _decrypt_github_token(encrypted)
    except JWEError:
        return None

    return GitHubSession(access_token=access_token, username=payload.get("login"))


def _encryption_key() -> bytes:
    # A256GCM con "dir" necesita una clave de 32 bytes
    return hashlib.sha256(get_settings().jwt_secret.encode()).digest()


def _encrypt_github_token(access_token: str) -> str:
    return jwe.encrypt(
        access_token.encode(), _encryption_key(), algorithm="dir", encryption="A256GCM"
    ).decode()


def _decrypt_github_token(encrypted: str) -> str:
    decrypted = jwe.decrypt(encrypted.encode(), _encryption_key())
    if not decrypted:
        raise JWEError("Empty GitHub token")
    return decrypted.decode()
