"""Domain exceptions for the stych library."""


class StychError(Exception):
    """Base class for all stych library exceptions."""


class TransportError(StychError):
    """Raised when a request cannot be sent or its response cannot be decoded.

    Covers connection failures, timeouts, and response bodies that are not
    the JSON object the service is expected to return.  The underlying
    exception is kept on :attr:`cause` and is also chained as
    ``__cause__``.

    Args:
        message: Human-readable description of the failure.
        cause: The exception raised by the transport or decoder, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ServiceRejectedError(StychError):
    """Raised when the service answers with a status other than HTTP 200.

    The library does not distinguish transient (5xx) from client (4xx)
    failures; callers inspect :attr:`status_code` to decide.

    Args:
        status_code: The HTTP status returned by the service.
    """

    operation = "Request"

    def __init__(self, status_code: int):
        super().__init__(
            f"{self.operation} rejected by the service (HTTP {status_code})"
        )
        self.status_code = status_code


class LoginOrCreateFailed(ServiceRejectedError):
    """The login-or-create request was rejected."""

    operation = "Login or create"


class UserCreateFailed(ServiceRejectedError):
    """The user creation request was rejected."""

    operation = "User creation"


class AuthenticationFailed(ServiceRejectedError):
    """The token was not accepted.

    This is an expected outcome rather than a fault: callers branch on it
    to deny access.
    """

    operation = "Authentication"
