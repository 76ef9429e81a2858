"""Persistent storage and resolution of identity service credentials.

Credentials are stored in ``~/.config/stych/credentials.json`` with
permissions restricted to the owner (0o600).  Written by
``stych config setup``.

:func:`resolve` builds a :class:`~stych.auth.store.Credentials` from, in
order of priority (first match wins per field):

1. Values passed as keyword arguments.
2. ``STYCH_*`` environment variables.
3. The stored credentials file.
"""

import json
import os
from pathlib import Path

from stych.auth.store import DEFAULT_API_BASE, Credentials

_CONFIG_DIR = Path.home() / ".config" / "stych"
_CREDENTIALS_FILE = _CONFIG_DIR / "credentials.json"

_FIELDS = (
    "project_id",
    "secret",
    "login_redirect",
    "signup_redirect",
    "api_base",
)

_ENV_VARS = {
    "project_id": "STYCH_PROJECT_ID",
    "secret": "STYCH_SECRET",
    "login_redirect": "STYCH_LOGIN_REDIRECT",
    "signup_redirect": "STYCH_SIGNUP_REDIRECT",
    "api_base": "STYCH_API_BASE",
}


def save(credentials: Credentials) -> None:
    """Persist credentials to the config file.

    Creates the config directory if it does not already exist and restricts
    file permissions to the owner only.

    Args:
        credentials: The credential store to write.
    """
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CREDENTIALS_FILE.write_text(
        json.dumps(
            {name: getattr(credentials, name) for name in _FIELDS},
            indent=2,
        ),
        encoding="utf-8",
    )
    _CREDENTIALS_FILE.chmod(0o600)


def load() -> dict[str, str]:
    """Load stored credentials from the config file.

    Returns:
        A dictionary keyed by credential field name, or an empty dictionary
        if no credentials file exists or it cannot be parsed.
    """
    if not _CREDENTIALS_FILE.exists():
        return {}
    try:
        data = json.loads(_CREDENTIALS_FILE.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def clear() -> bool:
    """Remove the credentials file.

    Returns:
        ``True`` if the file was deleted, ``False`` if it did not exist.
    """
    if _CREDENTIALS_FILE.exists():
        _CREDENTIALS_FILE.unlink()
        return True
    return False


def credentials_path() -> Path:
    """Return the path to the credentials file."""
    return _CREDENTIALS_FILE


def resolve(**overrides: str | None) -> Credentials | None:
    """Build credentials from arguments, environment and the stored file.

    Args:
        **overrides: Any of ``project_id``, ``secret``, ``login_redirect``,
            ``signup_redirect`` and ``api_base``.  ``None`` or empty values
            fall through to the next source.

    Returns:
        A :class:`Credentials` instance, or ``None`` when the project id or
        the secret cannot be resolved from any source.  Missing redirect
        URLs resolve to empty strings; a missing API base resolves to the
        production endpoint.
    """
    unknown = set(overrides) - set(_FIELDS)
    if unknown:
        raise TypeError(f"Unknown credential fields: {sorted(unknown)}")

    stored = load()
    values: dict[str, str | None] = {}
    for name in _FIELDS:
        values[name] = (
            overrides.get(name)
            or os.getenv(_ENV_VARS[name])
            or stored.get(name)
        )

    if not values["project_id"] or not values["secret"]:
        return None

    return Credentials.new_with_endpoint(
        values["project_id"],
        values["secret"],
        values["login_redirect"] or "",
        values["signup_redirect"] or "",
        values["api_base"] or DEFAULT_API_BASE,
    )


def credential_source() -> str:
    """Return a human-readable description of where credentials come from.

    Useful for the ``config status`` CLI command.

    Returns:
        ``"environment variables"`` when the project id is set in the
        environment, otherwise the path to the credentials file.
    """
    if os.getenv(_ENV_VARS["project_id"]):
        return "environment variables"
    return str(credentials_path())
