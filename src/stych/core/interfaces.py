"""Abstract interface for magic-link identity providers."""

from abc import ABC, abstractmethod

from stych.core.models import Token, User, UserIdentity


class MagicLinkProvider(ABC):
    """Abstract base class for passwordless identity service clients.

    Concrete providers implement the three round trips below.  The service
    layer depends exclusively on this abstraction, never on a specific
    provider implementation.
    """

    @abstractmethod
    def login_or_create(self, email: str) -> User:
        """Log in the account for *email*, or create it if none exists.

        Args:
            email: The address the magic link is sent to.  Its format is
                not checked.

        Returns:
            A :class:`User` whose identity is the submitted email and whose
            token is the freshly minted magic-link token, when the service
            returns one.

        Raises:
            TransportError: If the request fails or the response cannot
                be decoded.
            LoginOrCreateFailed: If the service answers with a status
                other than HTTP 200.
        """

    @abstractmethod
    def authenticate(self, token: Token) -> str:
        """Redeem a magic-link token.

        Args:
            token: The opaque token, sent exactly as given.

        Returns:
            The identifier of the user the token belongs to.

        Raises:
            TransportError: If the request fails or the response cannot
                be decoded.
            AuthenticationFailed: If the service rejects the token.
        """

    @abstractmethod
    def create_user(self, identity: UserIdentity) -> User:
        """Provision a user record without issuing a magic link.

        Args:
            identity: The email, phone, or both to key the account on.

        Returns:
            The new :class:`User`, with no token attached.

        Raises:
            TransportError: If the request fails or the response cannot
                be decoded.
            UserCreateFailed: If the service answers with a status other
                than HTTP 200.
        """
