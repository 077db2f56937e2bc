"""Authentication: OAuth login, identity resolution and session users."""

from authcache.core.auth.identity import (
    AuthFailure,
    AuthResult,
    AuthSuccess,
    authenticate_external_identity,
)
from authcache.core.auth.loader import SessionUserLoader, project_user
from authcache.core.auth.oauth import (
    GoogleOAuthProvider,
    OAuthUserInfo,
    complete_oauth_login,
    generate_state,
)
from authcache.core.auth.session import deserialize_user, parse_session_identifier, serialize_user


__all__ = [
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "GoogleOAuthProvider",
    "OAuthUserInfo",
    "SessionUserLoader",
    "authenticate_external_identity",
    "complete_oauth_login",
    "deserialize_user",
    "generate_state",
    "parse_session_identifier",
    "project_user",
    "serialize_user",
]
