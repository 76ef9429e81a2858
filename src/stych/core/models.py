"""Data model dataclasses shared across providers."""

from dataclasses import dataclass, replace
from enum import Enum

Token = str
"""Opaque bearer string.  Never parsed; sent back exactly as received."""


# ----------------------
# UserIdentity
# ----------------------


class IdentityKind(str, Enum):
    """Which identifiers a :class:`UserIdentity` carries."""

    email = "email"
    phone = "phone"
    both = "both"


@dataclass(frozen=True)
class UserIdentity:
    """Describes how a user is identified: by email, phone, or both.

    At least one of ``email`` and ``phone`` must be set.  The JSON form is
    a flat object holding only the identifiers that are present, so the
    kind is recovered from which keys appear.
    """

    email: str | None = None
    phone: str | None = None

    def __post_init__(self):
        if self.email is None and self.phone is None:
            raise ValueError("A user identity needs an email or a phone")

    @classmethod
    def from_email(cls, email: str) -> "UserIdentity":
        return cls(email=str(email))

    @classmethod
    def from_phone(cls, phone: str) -> "UserIdentity":
        return cls(phone=str(phone))

    @classmethod
    def from_email_and_phone(cls, email: str, phone: str) -> "UserIdentity":
        return cls(email=str(email), phone=str(phone))

    @property
    def kind(self) -> IdentityKind:
        if self.email is not None and self.phone is not None:
            return IdentityKind.both
        if self.email is not None:
            return IdentityKind.email
        return IdentityKind.phone

    def to_dict(self) -> dict[str, str]:
        """Return the JSON-ready form of this identity.

        Returns:
            A dictionary with an ``email`` key, a ``phone`` key, or both.
        """
        data: dict[str, str] = {}
        if self.email is not None:
            data["email"] = self.email
        if self.phone is not None:
            data["phone"] = self.phone
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserIdentity":
        """Build an identity from its JSON form.

        Args:
            data: A dictionary as produced by :meth:`to_dict`.  Unknown
                keys are ignored.

        Returns:
            The matching :class:`UserIdentity`.

        Raises:
            ValueError: If neither ``email`` nor ``phone`` is present.
        """
        return cls(email=data.get("email"), phone=data.get("phone"))


# ----------------------
# User
# ----------------------


@dataclass(frozen=True)
class User:
    """Represents a user account held by the identity service."""

    id: str
    """Service-assigned identifier, stable across calls for one account."""

    identity: UserIdentity | None = None
    """How the user is identified, when known."""

    token: Token | None = None
    """Magic-link token minted by login-or-create.  ``None`` once redeemed
    or when the user was created without a magic link."""

    def without_token(self) -> "User":
        """Return a copy of this user with the token forgotten."""
        return replace(self, token=None)
