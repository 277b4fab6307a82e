"""
AuthService - GitHub OAuth authentication logic.
"""

import logging

import httpx

from app.core.config import get_settings
from app.core.security import exchange_github_code, create_session_token, GitHubOAuthError
from app.models.session import GitHubSession
from app.services.github_client import GITHUB_ACCEPT

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Base exception for auth service errors."""
    pass


class AuthService:
    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    async def authenticate_with_github(self, code: str) -> tuple[GitHubSession, str]:
        """
        Authenticate user with the code from GitHub's OAuth callback.

        1. Exchanges the code for a GitHub access token
        2. Looks up the GitHub login for that token
        3. Returns the session and a signed session JWT

        Returns: (session, jwt_token)
        Raises: AuthServiceError on failure
        """
        try:
            access_token = await exchange_github_code(code, self.http_client)
        except GitHubOAuthError as e:
            raise AuthServiceError(str(e))

        username = await self.fetch_username(access_token)
        session = GitHubSession(access_token=access_token, username=username)

        return session, create_session_token(access_token, username)

    async def fetch_username(self, access_token: str) -> str | None:
        """GitHub login for the token, None if GitHub can't tell us."""
        settings = get_settings()
        try:
            response = await self.http_client.get(
                f"{settings.github_api_url}/user",
                headers={"Authorization": f"Bearer {access_token}", "Accept": GITHUB_ACCEPT},
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ Failed to fetch GitHub username: {e}")
            return None

        if not response.is_success:
            logger.error(f"❌ Failed to fetch GitHub username. Status: {response.status_code}")
            return None

        try:
            login = response.json().get("login")
        except (ValueError, AttributeError) as e:
            logger.error(f"❌ Unexpected GitHub /user payload: {e}")
            return None

        return login if isinstance(login, str) and login else None
