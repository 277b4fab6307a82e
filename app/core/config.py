"""
Configuración de la app cargada desde variables de entorno (.env)

Todo lo que varía entre desarrollo/producción va aquí
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # GitHub REST API
    github_api_url: str = "https://api.github.com"
    github_per_page: int = 100  # Tamaño de página (máximo que permite GitHub)
    github_timeout_seconds: float = 30.0  # Timeout por request a GitHub

    # GitHub OAuth App - para el login de usuarios
    github_oauth_url: str = "https://github.com/login/oauth"
    github_client_id: str = ""
    github_client_secret: str | None = None

    # JWT - para firmar los tokens de sesión
    jwt_secret: str  # Una cadena larga y aleatoria
    jwt_algorithm: str = "HS256"  # Algoritmo de encriptación
    jwt_expire_minutes: int = 60 * 24 * 7  # Los tokens expiran en 7 días

    # App
    app_env: str = "development"  # o "production"
    debug: bool = False
    log_level: str = "INFO"

    # CORS - de dónde pueden venir los requests
    cors_origins: str = "http://localhost:3000"  # URLs separadas por coma
    cors_origin_regex: str | None = None  # Ej: "https://.*\.vercel\.app" para previews

    class Config:
        env_file = ".env"  # Lee desde el archivo .env
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora campos extras del .env que no estén en el modelo


@lru_cache()
def get_settings() -> Settings:
    """Retorna la instancia de configuración (cacheada para no releerla)"""
    return Settings()
