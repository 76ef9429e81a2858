"""Stytch provider package."""

from stych.providers.stytch.client import StytchClient

__all__ = ["StytchClient"]
