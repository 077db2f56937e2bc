"""OAuth2 authentication with Google.

The flow:
1. Client is redirected to ``get_authorize_url(...)``
2. User authenticates with Google
3. Google redirects back with ``code`` and ``state``
4. ``complete_oauth_login`` exchanges the code, fetches the identity and
   finds or creates the directory record
"""

import secrets
from typing import Any
from urllib.parse import urlencode

import httpx
import structlog
from pydantic import BaseModel

from authcache.config import Settings
from authcache.core.auth.identity import AuthFailure, AuthResult, authenticate_external_identity
from authcache.core.constants import OAUTH_HTTP_TIMEOUT_SECONDS, OAUTH_STATE_BYTES
from authcache.core.errors import OAuthError
from authcache.modules.users.repos import UserDirectory


logger = structlog.get_logger()


class OAuthUserInfo(BaseModel):
    """Identity reported by the OAuth provider."""

    provider: str
    provider_id: str
    email: str


class GoogleOAuthProvider:
    """Google OAuth2 / OpenID Connect provider."""

    name = "google"
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    userinfo_url = "https://openidconnect.googleapis.com/v1/userinfo"
    scopes = ("openid", "email", "profile")

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleOAuthProvider":
        """Build the provider from application settings."""
        return cls(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_url,
        )

    @property
    def is_configured(self) -> bool:
        """Check if the provider is properly configured."""
        return bool(self.client_id and self.client_secret)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=OAUTH_HTTP_TIMEOUT_SECONDS,
        )

    def get_authorize_url(self, state: str, redirect_uri: str | None = None) -> str:
        """Generate the authorization URL.

        Args:
            state: CSRF protection state parameter
            redirect_uri: Callback URL; defaults to the configured one

        Returns:
            The full authorization URL
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": state,
            "prompt": "select_account",  # Always show account picker
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str | None = None) -> dict[str, Any]:
        """Exchange an authorization code for tokens.

        Args:
            code: The authorization code
            redirect_uri: The callback URL (must match authorize)

        Returns:
            Token response from Google
        """
        async with self._client() as client:
            response = await client.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                    "redirect_uri": redirect_uri or self.redirect_uri,
                    "grant_type": "authorization_code",
                },
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            return response.json()

    async def get_user_info(self, access_token: str) -> OAuthUserInfo:
        """Get the authenticated identity from Google."""
        async with self._client() as client:
            response = await client.get(
                self.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            response.raise_for_status()
            data = response.json()

        return OAuthUserInfo(
            provider=self.name,
            provider_id=data["sub"],
            email=data["email"],
        )


async def complete_oauth_login(
    provider: GoogleOAuthProvider,
    directory: UserDirectory,
    code: str,
    redirect_uri: str | None = None,
) -> AuthResult:
    """Finish an OAuth login after the provider redirected back.

    Args:
        provider: The OAuth provider that issued ``code``
        directory: User directory to resolve the identity against
        code: Authorization code from the callback
        redirect_uri: Callback URL used for the authorize step

    Returns:
        AuthSuccess with the user, or AuthFailure carrying an OAuthError
    """
    try:
        tokens = await provider.exchange_code(code, redirect_uri)
        access_token = tokens.get("access_token") if isinstance(tokens, dict) else None
        if not access_token:
            return AuthFailure(
                error=OAuthError("No access token in OAuth response", error_code="missing_token")
            )
        user_info = await provider.get_user_info(access_token)
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
        # ValueError covers non-JSON bodies and pydantic validation of userinfo
        logger.warning("oauth_exchange_failed", provider=provider.name, error=str(e))
        return AuthFailure(error=OAuthError(details={"provider": provider.name}))

    return await authenticate_external_identity(
        directory,
        external_id=user_info.provider_id,
        email=user_info.email,
    )


def generate_state() -> str:
    """Generate a secure random state for CSRF protection."""
    return secrets.token_urlsafe(OAUTH_STATE_BYTES)
