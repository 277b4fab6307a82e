"""
Entry point de la API
"""

import logging
import re
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import get_settings
from app.core.errors import register_error_handlers

from app.controllers.auth_controller import router as auth_router
from app.controllers.prs_controller import router as prs_router
from app.controllers.repositories_controller import router as repositories_router
from app.controllers.health_controller import router as health_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Parse CORS origins
CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",")]
CORS_ORIGIN_REGEX = re.compile(settings.cors_origin_regex) if settings.cors_origin_regex else None


def is_allowed_origin(origin: str) -> bool:
    """Check if origin is allowed by explicit list or regex pattern."""
    if not origin:
        return False
    if origin in CORS_ORIGINS:
        return True
    if CORS_ORIGIN_REGEX and CORS_ORIGIN_REGEX.match(origin):
        return True
    return False


class CORSMiddleware(BaseHTTPMiddleware):
    """
    Custom CORS middleware that handles OPTIONS preflight BEFORE routing.

    Preflight requests never carry the session header, so they'd otherwise
    get a 401 from the session dependency.
    """

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin", "")

        # Handle preflight OPTIONS request IMMEDIATELY
        if request.method == "OPTIONS":
            if is_allowed_origin(origin):
                return Response(
                    status_code=200,
                    headers={
                        "Access-Control-Allow-Origin": origin,
                        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
                        "Access-Control-Allow-Headers": "Authorization, Content-Type, Accept, Origin, X-Requested-With",
                        "Access-Control-Allow-Credentials": "true",
                        "Access-Control-Max-Age": "86400",  # Cache preflight for 24 hours
                    }
                )
            else:
                # Origin not allowed
                return Response(status_code=403, content="Origin not allowed")

        # For non-OPTIONS requests, proceed normally and add CORS headers to response
        response = await call_next(request)

        if is_allowed_origin(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"✅ PR Leaderboard API started ({settings.app_env}), GitHub API: {settings.github_api_url}")
    yield
    logger.info("❌ PR Leaderboard API stopped")

# Creo la app
app = FastAPI(
    title="PR Leaderboard API",
    description="Leaderboard de contribuidores por pull requests de un repositorio de GitHub",
    version="1.0.0",
    lifespan=lifespan
)

# Add custom CORS middleware (handles OPTIONS before routing)
app.add_middleware(CORSMiddleware)

# Todos los errores salen como {"error": "..."}
register_error_handlers(app)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(prs_router)
app.include_router(repositories_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "PR Leaderboard API",
        "version": "1.0.0",
        "docs": "/docs"  # Link a la documentación interactiva de Swagger
    }
