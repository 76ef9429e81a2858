"""CLI entry point for the stych tool.

This module is the composition root of the application.  It is the only
place that imports the concrete provider (StytchClient).  All other layers
depend solely on abstractions.
"""

import json
import logging
import sys
from dataclasses import asdict
from enum import Enum

# Ensure UTF-8 output on Windows where stdout may default to cp1252.
# reconfigure() is a no-op when encoding is already utf-8.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from stych.auth import credentials as creds_store
from stych.auth.store import DEFAULT_API_BASE, Credentials
from stych.core.exceptions import (
    AuthenticationFailed,
    StychError,
)
from stych.core.models import User, UserIdentity
from stych.providers.stytch.client import StytchClient
from stych.services.auth_service import MagicLinkService

app = typer.Typer()
config_app = typer.Typer(help="Manage identity service credentials.")
user_app = typer.Typer(help="Manage user records.")

app.add_typer(config_app, name="config")
app.add_typer(user_app, name="user")

console = Console(legacy_windows=False)


# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------


class OutputFormat(str, Enum):
    """Supported output formats for flow commands."""

    table = "table"
    json = "json"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log HTTP requests to stderr."
    ),
):
    """Passwordless email sign-in against the Stytch API."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True))],
        )


def _get_service() -> MagicLinkService:
    """Build and return a MagicLinkService backed by the Stytch provider.

    Returns:
        A :class:`~stych.services.auth_service.MagicLinkService` instance.

    Raises:
        typer.Exit: If no credentials are configured.
    """
    credentials = creds_store.resolve()
    if credentials is None:
        console.print("[red]No credentials configured.[/red]")
        console.print(
            "Run [bold]stych config setup[/bold] or set "
            "STYCH_PROJECT_ID and STYCH_SECRET."
        )
        raise typer.Exit(1)
    return MagicLinkService(StytchClient(credentials))


def _user_row(user: User) -> dict:
    row = {"id": user.id, "token": user.token}
    row.update(asdict(user.identity) if user.identity else {})
    return row


def _print_user(user: User, output: OutputFormat, title: str) -> None:
    """Render a user as JSON or as a two-column table."""
    row = _user_row(user)
    if output == OutputFormat.json:
        print(json.dumps(row, indent=2))
        return
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value", style="cyan")
    for name, value in row.items():
        table.add_row(name, value if value is not None else "—")
    console.print(table)


# ---------------------------------------------------------------------------
# config commands
# ---------------------------------------------------------------------------


@config_app.command()
def setup():
    """Configure and save identity service credentials locally."""
    console.print("\n[bold]Stytch credentials setup[/bold]\n")

    project_id = typer.prompt("Project ID")
    secret = typer.prompt("Secret", hide_input=True)
    login_redirect = typer.prompt("Login redirect URL")
    signup_redirect = typer.prompt("Signup redirect URL")
    api_base = typer.prompt("API base URL", default=DEFAULT_API_BASE)

    creds_store.save(
        Credentials.new_with_endpoint(
            project_id, secret, login_redirect, signup_redirect, api_base
        )
    )
    console.print(
        f"[green]✓ Credentials saved to:[/green] {creds_store.credentials_path()}"
    )


@config_app.command()
def status():
    """Show the configured credentials (the secret is never printed)."""
    credentials = creds_store.resolve()
    if credentials is None:
        console.print("[yellow]No credentials configured.[/yellow]")
        console.print("Run [bold]stych config setup[/bold].")
        raise typer.Exit(1)

    console.print(
        f"[green]✓ Credentials[/green]  {creds_store.credential_source()}"
    )
    console.print(f"  Project : {credentials.project_id}")
    console.print(f"  API     : {credentials.api_base}")
    console.print(f"  Login   : {credentials.login_redirect or '—'}")
    console.print(f"  Signup  : {credentials.signup_redirect or '—'}")


@config_app.command()
def clear():
    """Remove locally saved credentials."""
    if creds_store.clear():
        console.print("[green]✓ Credentials removed.[/green]")
    else:
        console.print("[yellow]No saved credentials found.[/yellow]")


# ---------------------------------------------------------------------------
# flow commands
# ---------------------------------------------------------------------------


@app.command()
def login(
    email: str,
    output: OutputFormat = typer.Option(
        OutputFormat.table, "--output", "-o", help="Output format."
    ),
):
    """Log in or create the account for EMAIL and send it a magic link."""
    service = _get_service()
    try:
        with console.status("[dim]Contacting Stytch…[/dim]", spinner="dots"):
            user = service.login_or_create(email)
    except StychError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)
    _print_user(user, output, title=f"User — {email}")


@app.command()
def authenticate(
    token: str,
    output: OutputFormat = typer.Option(
        OutputFormat.table, "--output", "-o", help="Output format."
    ),
):
    """Redeem a magic-link TOKEN and show whose it is."""
    service = _get_service()
    try:
        user_id = service.authenticate(token)
    except AuthenticationFailed as e:
        console.print(
            f"[red]✗ Token rejected[/red] (HTTP {e.status_code}).",
            highlight=False,
        )
        raise typer.Exit(1)
    except StychError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)

    if output == OutputFormat.json:
        print(json.dumps({"user_id": user_id}, indent=2))
    else:
        console.print(f"[green]✓ Authenticated[/green] {user_id}")


# ---------------------------------------------------------------------------
# user commands
# ---------------------------------------------------------------------------


@user_app.command()
def create(
    email: str | None = typer.Option(None, "--email", help="Email address."),
    phone: str | None = typer.Option(None, "--phone", help="Phone number."),
    output: OutputFormat = typer.Option(
        OutputFormat.table, "--output", "-o", help="Output format."
    ),
):
    """Create a user keyed by --email, --phone, or both."""
    try:
        identity = UserIdentity(email=email, phone=phone)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}.", highlight=False)
        raise typer.Exit(2)

    service = _get_service()
    try:
        user = service.create_user(identity)
    except StychError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)
    _print_user(user, output, title=f"User — {identity.kind.value}")
