"""Service layer that wraps a MagicLinkProvider for sign-in flows."""

from stych.core.exceptions import AuthenticationFailed
from stych.core.interfaces import MagicLinkProvider
from stych.core.models import Token, User, UserIdentity


class MagicLinkService:
    """Provides application-level methods for passwordless sign-in.

    Delegates all API calls to the injected provider so that the service
    layer remains independent of any specific identity service.
    """

    def __init__(self, provider: MagicLinkProvider):
        """Initialise the service.

        Args:
            provider: A concrete implementation of
                :class:`MagicLinkProvider`.
        """
        self.provider = provider

    def login_or_create(self, email: str) -> User:
        """Send a magic link to *email*, creating the account if needed.

        Args:
            email: The user's email address.

        Returns:
            The :class:`User`, carrying the freshly minted token if any.
        """
        return self.provider.login_or_create(email)

    def authenticate(self, token: Token) -> str:
        """Redeem *token* and return the identifier of its user.

        Args:
            token: The opaque magic-link token.

        Returns:
            The user identifier.
        """
        return self.provider.authenticate(token)

    def is_authenticated(self, token: Token) -> bool:
        """Return ``True`` if the service accepts *token*.

        A rejected token yields ``False``.  Transport failures still raise,
        since they say nothing about the token itself.

        Args:
            token: The opaque magic-link token.

        Returns:
            ``True`` when the token was redeemed successfully.
        """
        try:
            self.provider.authenticate(token)
        except AuthenticationFailed:
            return False
        return True

    def redeem(self, user: User) -> User:
        """Authenticate the token carried by *user* and forget it.

        Args:
            user: A :class:`User` returned by :meth:`login_or_create`.

        Returns:
            The same user without its token.

        Raises:
            ValueError: If *user* carries no token, or the service reports
                a different user for it.
        """
        if user.token is None:
            raise ValueError(f"User {user.id!r} has no token to redeem")
        user_id = self.provider.authenticate(user.token)
        if user_id != user.id:
            raise ValueError(
                f"Token for user {user.id!r} belongs to {user_id!r}"
            )
        return user.without_token()

    def create_user(self, identity: UserIdentity) -> User:
        """Provision a user without sending a magic link.

        Args:
            identity: The email, phone, or both to key the account on.

        Returns:
            The new :class:`User`.
        """
        return self.provider.create_user(identity)
