"""Immutable credential store for the identity service."""

from dataclasses import dataclass, field

DEFAULT_API_BASE = "https://stytch.com"


@dataclass(frozen=True)
class Credentials:
    """Connection and authentication parameters for the identity service.

    Nothing is validated and no I/O happens at construction time; bad
    values surface only when the service rejects a request.  Instances are
    immutable and may be shared freely between threads.

    Attributes:
        project_id: Project identifier, sent as the basic-auth username.
        secret: Project secret, sent as the basic-auth password.
        login_redirect: URL the login magic link points to.
        signup_redirect: URL the signup magic link points to.
        api_base: Prefix for every request URL.
    """

    project_id: str
    secret: str = field(repr=False)
    login_redirect: str
    signup_redirect: str
    api_base: str = DEFAULT_API_BASE

    @classmethod
    def new(
        cls,
        project_id,
        secret,
        login_redirect,
        signup_redirect,
    ) -> "Credentials":
        """Create a credential store pointing at the production API.

        Every argument is converted with :func:`str`.
        """
        return cls.new_with_endpoint(
            project_id,
            secret,
            login_redirect,
            signup_redirect,
            DEFAULT_API_BASE,
        )

    @classmethod
    def new_with_endpoint(
        cls,
        project_id,
        secret,
        login_redirect,
        signup_redirect,
        api_base,
    ) -> "Credentials":
        """Create a credential store for a custom API base URL.

        Used for staging deployments and for tests.  Every argument is
        converted with :func:`str`.
        """
        return cls(
            project_id=str(project_id),
            secret=str(secret),
            login_redirect=str(login_redirect),
            signup_redirect=str(signup_redirect),
            api_base=str(api_base),
        )

    @property
    def basic_auth(self) -> tuple[str, str]:
        """The ``(username, password)`` pair for HTTP basic auth."""
        return (self.project_id, self.secret)
