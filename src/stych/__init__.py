"""Client for the Stytch passwordless (magic link) email flow.

Usage::

    from stych import AuthenticationFailed, Credentials, StytchClient

    credentials = Credentials.new(
        "project_id", "secret", "https://app/login", "https://app/signup"
    )
    client = StytchClient(credentials)

    user = client.login_or_create("root@example.com")
    try:
        client.authenticate(user.token)
    except AuthenticationFailed:
        ...
"""

from stych.auth.store import DEFAULT_API_BASE, Credentials
from stych.core.exceptions import (
    AuthenticationFailed,
    LoginOrCreateFailed,
    ServiceRejectedError,
    StychError,
    TransportError,
    UserCreateFailed,
)
from stych.core.models import IdentityKind, Token, User, UserIdentity
from stych.providers.stytch.client import StytchClient
from stych.services.auth_service import MagicLinkService

__all__ = [
    "AuthenticationFailed",
    "Credentials",
    "DEFAULT_API_BASE",
    "IdentityKind",
    "LoginOrCreateFailed",
    "MagicLinkService",
    "ServiceRejectedError",
    "StychError",
    "StytchClient",
    "Token",
    "TransportError",
    "User",
    "UserCreateFailed",
    "UserIdentity",
]
