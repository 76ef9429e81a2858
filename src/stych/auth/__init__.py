"""Authentication layer: the credential store and its persistence."""

from stych.auth.store import DEFAULT_API_BASE, Credentials

__all__ = ["Credentials", "DEFAULT_API_BASE"]
