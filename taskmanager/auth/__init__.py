"""Authentication and authorization."""

from .dependencies import (
    Identity,
    check_role,
    extract_bearer_token,
    require_admin,
    require_identity,
    require_role,
)
from .oauth import (
    ExternalProfile,
    get_google_client,
    google_configured,
    resolve_oauth_user,
)
from .passwords import authenticate, hash_password, register_user, verify_password
from .tokens import TokenClaims, issue_token, verify_token

__all__ = [
    "ExternalProfile",
    "Identity",
    "TokenClaims",
    "authenticate",
    "check_role",
    "extract_bearer_token",
    "get_google_client",
    "google_configured",
    "hash_password",
    "issue_token",
    "register_user",
    "require_admin",
    "require_identity",
    "require_role",
    "resolve_oauth_user",
    "verify_password",
    "verify_token",
]
