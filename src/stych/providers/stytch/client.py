"""Stytch magic-link provider over the HTTP API."""

import logging

import requests

from stych.auth.store import Credentials
from stych.core.exceptions import (
    AuthenticationFailed,
    LoginOrCreateFailed,
    ServiceRejectedError,
    TransportError,
    UserCreateFailed,
)
from stych.core.interfaces import MagicLinkProvider
from stych.core.models import Token, User, UserIdentity

logger = logging.getLogger(__name__)

LOGIN_OR_CREATE_PATH = "/v1/magic_links/email/login_or_create"
AUTHENTICATE_PATH = "/v1/magic_links/authenticate"
USERS_PATH = "/users"


class StytchClient(MagicLinkProvider):
    """Provider for the Stytch email magic-link flow.

    Every operation is a single ``POST`` authenticated with the project id
    and secret as HTTP basic credentials.  Only HTTP 200 counts as success;
    any other status raises the operation's
    :class:`~stych.core.exceptions.ServiceRejectedError` subclass whatever
    the body says.  Nothing is retried and no state is kept between calls.

    Cancellation is left to the transport: requests that exceed
    ``timeout`` surface as :class:`~stych.core.exceptions.TransportError`.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: requests.Session | None = None,
        timeout: float | None = 30,
    ):
        """Initialise the client.  No network traffic happens here.

        Args:
            credentials: The credential store to authenticate with.
            session: An optional :class:`requests.Session` to send requests
                through.  A new session is created when ``None``.
            timeout: Seconds to wait for the service on each request, or
                ``None`` to wait indefinitely.
        """
        self.credentials = credentials
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def login_or_create(self, email: str) -> User:
        """Log in the account for *email*, or create it if none exists.

        Sends the email together with both redirect URLs.  The service
        emails the user a magic link pointing at one of them.

        Args:
            email: The user's email address.  Not validated.

        Returns:
            A :class:`~stych.core.models.User` identified by *email*,
            carrying the minted token when the service returns one.

        Raises:
            TransportError: If the request fails or the response body is
                not the expected JSON object.
            LoginOrCreateFailed: If the service answers with a status other
                than HTTP 200.
        """
        email = str(email)
        data = self._post(
            LOGIN_OR_CREATE_PATH,
            {
                "email": email,
                "login_magic_link_url": self.credentials.login_redirect,
                "signup_magic_link_url": self.credentials.signup_redirect,
            },
            LoginOrCreateFailed,
        )
        return self._parse_user(data, UserIdentity.from_email(email))

    def authenticate(self, token: Token) -> str:
        """Redeem a magic-link token and return its user's identifier.

        The token is sent exactly as given.  The client keeps no record of
        redeemed tokens; discarding them afterwards is up to the caller.

        Args:
            token: The opaque token taken from the magic link.

        Returns:
            The ``user_id`` reported by the service.

        Raises:
            TransportError: If the request fails or the response body is
                not the expected JSON object.
            AuthenticationFailed: If the service rejects the token.
        """
        data = self._post(
            AUTHENTICATE_PATH, {"token": token}, AuthenticationFailed
        )
        return self._parse_user_id(data)

    def create_user(self, identity: UserIdentity) -> User:
        """Provision a user keyed by an email, a phone, or both.

        Args:
            identity: The identifiers for the new account.

        Returns:
            The new :class:`~stych.core.models.User`, without a token.

        Raises:
            TransportError: If the request fails or the response body is
                not the expected JSON object.
            UserCreateFailed: If the service answers with a status other
                than HTTP 200.
        """
        data = self._post(USERS_PATH, identity.to_dict(), UserCreateFailed)
        return self._parse_user(data, identity)

    # -------------------------
    # Internal helpers
    # -------------------------

    def _url(self, path: str) -> str:
        return self.credentials.api_base + path

    def _post(
        self,
        path: str,
        payload: dict,
        rejected: type[ServiceRejectedError],
    ) -> dict:
        """Send one authenticated JSON ``POST`` and decode the reply.

        Args:
            path: Endpoint path appended to the API base.
            payload: JSON body of the request.
            rejected: Exception class raised for a non-200 status.

        Returns:
            The decoded JSON object of a successful response.

        Raises:
            TransportError: If the request cannot be sent or the body is
                not a JSON object.
            ServiceRejectedError: An instance of *rejected* when the status
                is not HTTP 200.
        """
        url = self._url(path)
        logger.debug("POST %s", url)
        try:
            r = self.session.post(
                url,
                json=payload,
                auth=self.credentials.basic_auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("POST %s failed: %s", url, e)
            raise TransportError(f"Request to {url} failed: {e}", e) from e

        if r.status_code != 200:
            logger.warning("POST %s returned HTTP %s", url, r.status_code)
            raise rejected(r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            logger.error("POST %s returned a non-JSON body", url)
            raise TransportError(
                f"Response from {url} is not valid JSON", e
            ) from e
        if not isinstance(data, dict):
            raise TransportError(f"Response from {url} is not a JSON object")
        return data

    @staticmethod
    def _parse_user_id(data: dict) -> str:
        """Extract the ``user_id`` field from a decoded response.

        Raises:
            TransportError: If the field is missing or not a string.
        """
        user_id = data.get("user_id")
        if not isinstance(user_id, str):
            raise TransportError("Response is missing a string 'user_id'")
        return user_id

    @staticmethod
    def _parse_user(data: dict, identity: UserIdentity) -> User:
        """Map a decoded response to a User domain model.

        Args:
            data: The decoded JSON response body.
            identity: The identity the request was made for.

        Returns:
            A :class:`~stych.core.models.User` instance.  ``token`` is set
            only when the body holds a string ``token`` field.
        """
        token = data.get("token")
        return User(
            id=StytchClient._parse_user_id(data),
            identity=identity,
            token=token if isinstance(token, str) else None,
        )
