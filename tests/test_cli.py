"""Unit tests for CLI commands.

All tests use Typer's CliRunner and mock _get_service so that no real
HTTP requests are made.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from stych.auth.store import Credentials
from stych.core.exceptions import (
    AuthenticationFailed,
    LoginOrCreateFailed,
    TransportError,
)
from stych.core.models import User, UserIdentity
from stych_cli.main import app

runner = CliRunner()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_user():
    return User(
        id="user-test-1",
        identity=UserIdentity.from_email("alice@example.com"),
        token="tok-abc",
    )


@pytest.fixture()
def service():
    return MagicMock()


# ---------------------------------------------------------------------------
# login command
# ---------------------------------------------------------------------------


def test_login_table_output(service, mock_user):
    service.login_or_create.return_value = mock_user
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(app, ["login", "alice@example.com"])
    assert result.exit_code == 0
    assert "user-test-1" in result.output
    service.login_or_create.assert_called_once_with("alice@example.com")


def test_login_json_output(service, mock_user):
    service.login_or_create.return_value = mock_user
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(
            app, ["login", "alice@example.com", "--output", "json"]
        )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["id"] == "user-test-1"
    assert data["token"] == "tok-abc"
    assert data["email"] == "alice@example.com"


def test_login_rejected(service):
    service.login_or_create.side_effect = LoginOrCreateFailed(401)
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(app, ["login", "alice@example.com"])
    assert result.exit_code == 1
    assert "401" in result.output


def test_login_transport_error(service):
    service.login_or_create.side_effect = TransportError("connection refused")
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(app, ["login", "alice@example.com"])
    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_login_without_credentials():
    with patch("stych_cli.main.creds_store.resolve", return_value=None):
        result = runner.invoke(app, ["login", "alice@example.com"])
    assert result.exit_code == 1
    assert "No credentials configured" in result.output


# ---------------------------------------------------------------------------
# authenticate command
# ---------------------------------------------------------------------------


def test_authenticate_json_output(service):
    service.authenticate.return_value = "user-test-1"
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(
            app, ["authenticate", "tok-abc", "--output", "json"]
        )
    assert result.exit_code == 0
    assert json.loads(result.output) == {"user_id": "user-test-1"}
    service.authenticate.assert_called_once_with("tok-abc")


def test_authenticate_rejected(service):
    service.authenticate.side_effect = AuthenticationFailed(404)
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(app, ["authenticate", "bad"])
    assert result.exit_code == 1
    assert "404" in result.output


# ---------------------------------------------------------------------------
# user create command
# ---------------------------------------------------------------------------


def test_user_create_with_phone(service):
    identity = UserIdentity.from_phone("+15550100")
    service.create_user.return_value = User(id="user-2", identity=identity)
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(
            app,
            ["user", "create", "--phone", "+15550100", "--output", "json"],
        )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["id"] == "user-2"
    assert data["phone"] == "+15550100"
    service.create_user.assert_called_once_with(identity)


def test_user_create_requires_an_identifier(service):
    with patch("stych_cli.main._get_service", return_value=service):
        result = runner.invoke(app, ["user", "create"])
    assert result.exit_code == 2
    service.create_user.assert_not_called()


# ---------------------------------------------------------------------------
# config commands
# ---------------------------------------------------------------------------


def test_config_status_hides_secret():
    creds = Credentials.new("proj-1", "very-secret", "https://l", "https://s")
    with patch("stych_cli.main.creds_store.resolve", return_value=creds):
        result = runner.invoke(app, ["config", "status"])
    assert result.exit_code == 0
    assert "proj-1" in result.output
    assert "very-secret" not in result.output


def test_config_setup_saves_credentials():
    with patch("stych_cli.main.creds_store.save") as save:
        result = runner.invoke(
            app,
            ["config", "setup"],
            input="proj-1\nsec-1\nhttps://l\nhttps://s\nhttp://api\n",
        )
    assert result.exit_code == 0
    save.assert_called_once_with(
        Credentials.new_with_endpoint(
            "proj-1", "sec-1", "https://l", "https://s", "http://api"
        )
    )


def test_config_clear_without_file():
    with patch("stych_cli.main.creds_store.clear", return_value=False):
        result = runner.invoke(app, ["config", "clear"])
    assert result.exit_code == 0
    assert "No saved credentials" in result.output
