"""Unit tests for MagicLinkService using a mocked provider."""

from unittest.mock import MagicMock

import pytest

from stych.core.exceptions import AuthenticationFailed, TransportError
from stych.core.models import User, UserIdentity
from stych.services.auth_service import MagicLinkService


@pytest.fixture()
def provider():
    return MagicMock()


@pytest.fixture()
def service(provider):
    return MagicLinkService(provider)


def test_login_or_create_delegates(service, provider):
    user = User(id="u1", token="tok")
    provider.login_or_create.return_value = user
    assert service.login_or_create("a@b.com") is user
    provider.login_or_create.assert_called_once_with("a@b.com")


def test_is_authenticated_true(service, provider):
    provider.authenticate.return_value = "u1"
    assert service.is_authenticated("tok") is True


def test_is_authenticated_false_on_rejection(service, provider):
    provider.authenticate.side_effect = AuthenticationFailed(401)
    assert service.is_authenticated("tok") is False


def test_is_authenticated_propagates_transport_errors(service, provider):
    provider.authenticate.side_effect = TransportError("down")
    with pytest.raises(TransportError):
        service.is_authenticated("tok")


def test_redeem_forgets_token(service, provider):
    provider.authenticate.return_value = "u1"
    user = User(id="u1", identity=UserIdentity.from_email("a@b.com"), token="tok")
    redeemed = service.redeem(user)
    provider.authenticate.assert_called_once_with("tok")
    assert redeemed.token is None
    assert redeemed.id == "u1"


def test_redeem_without_token(service, provider):
    with pytest.raises(ValueError):
        service.redeem(User(id="u1"))
    provider.authenticate.assert_not_called()


def test_redeem_token_for_other_user(service, provider):
    provider.authenticate.return_value = "u2"
    with pytest.raises(ValueError):
        service.redeem(User(id="u1", token="tok"))


def test_create_user_delegates(service, provider):
    identity = UserIdentity.from_phone("+15550100")
    provider.create_user.return_value = User(id="u3", identity=identity)
    assert service.create_user(identity).id == "u3"
    provider.create_user.assert_called_once_with(identity)
