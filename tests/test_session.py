# tests/test_session.py

"""
Tests for the per-request session lifecycle.
"""

from unittest.mock import Mock

import pytest

from core.config import settings
from core.errors import AuthError, BackofficeError, SessionNotFound
from core.session import SessionController, SessionState
from models.auth import Session
from models.enums import Capability, Role

from conftest import FakeDocumentStore, make_principal


@pytest.fixture
def store():
    s = Mock()
    s.get_current_session.side_effect = SessionNotFound("No session")
    return s


@pytest.fixture
def docs():
    return FakeDocumentStore()


@pytest.fixture
def controller(store, docs):
    return SessionController(store, docs)


def _accept_login(store, principal, token="tok-1"):
    store.create_session.side_effect = None
    store.create_session.return_value = Session(id=token, principal=principal)
    store.get_current_session.side_effect = None
    store.get_current_session.return_value = principal


# ------------------------------------------------------------------
# Initial check
# ------------------------------------------------------------------
def test_starts_unknown_with_no_permissions(controller):
    assert controller.state is SessionState.unknown
    assert controller.principal is None
    for cap in Capability:
        assert controller.has_permission(cap) is False


def test_failed_session_check_is_anonymous(controller):
    assert controller.init("expired") is SessionState.anonymous
    assert controller.role is None
    for cap in Capability:
        assert controller.has_permission(cap) is False


def test_missing_token_is_anonymous(controller, store):
    store.get_current_session.side_effect = SessionNotFound("No session token supplied")
    assert controller.init(None) is SessionState.anonymous


def test_any_session_error_is_anonymous(controller, store):
    store.get_current_session.side_effect = ConnectionError("network")
    assert controller.init("tok") is SessionState.anonymous


def test_existing_session_is_authenticated(controller, store):
    store.get_current_session.side_effect = None
    store.get_current_session.return_value = make_principal(role="admin")

    assert controller.init("tok") is SessionState.authenticated
    assert controller.role is Role.admin
    assert controller.token == "tok"
    assert controller.has_permission("canEdit") is True


def test_resolving_state_during_lookup(controller, store):
    seen = []

    def lookup(token):
        seen.append(controller.state)
        raise SessionNotFound("nope")

    store.get_current_session.side_effect = lookup
    controller.init("tok")

    assert seen == [SessionState.resolving]


# ------------------------------------------------------------------
# Login
# ------------------------------------------------------------------
def test_super_admin_login(controller, store):
    _accept_login(store, make_principal(role="super_admin"))

    result = controller.login("boss@example.com", "secret")

    assert controller.state is SessionState.authenticated
    assert result.role is Role.super_admin
    assert result.token == "tok-1"
    assert result.redirect_to == settings.LANDING_PATH
    assert controller.has_permission("canManageAdmins") is True
    assert controller.has_permission("canApprove") is True
    assert controller.is_super_admin is True


def test_admin_from_admin_record(controller, store, docs):
    principal = make_principal(user_id="adm-7")
    docs.add(settings.ADMINS_TABLE, {"id": "adm-7", "role": "admin"})
    _accept_login(store, principal)

    controller.login("admin@example.com", "secret")

    assert controller.role is Role.admin
    assert controller.has_permission("canEdit") is True
    assert controller.has_permission("canDelete") is False
    assert controller.is_admin is True
    assert controller.is_super_admin is False


def test_no_preference_no_record_logs_in_as_user(controller, store):
    _accept_login(store, make_principal())

    controller.login("someone@example.com", "secret")

    assert controller.role is Role.user
    assert controller.has_permission("canRead") is True
    assert controller.has_permission("canEdit") is False


def test_admin_record_lookup_failure_is_user(controller, store, docs):
    docs.fail_with = ConnectionError("database unreachable")
    _accept_login(store, make_principal())

    controller.login("someone@example.com", "secret")

    assert controller.state is SessionState.authenticated
    assert controller.role is Role.user


def test_failed_login_propagates_and_stays_anonymous(controller, store):
    store.create_session.side_effect = AuthError("Invalid login credentials")

    with pytest.raises(AuthError) as exc:
        controller.login("x@example.com", "wrong")

    assert exc.value.message == "Invalid login credentials"
    assert controller.state is SessionState.anonymous
    assert controller.has_permission("canRead") is False
    store.create_session.assert_called_once()


def test_login_uses_login_payload_when_recheck_fails(controller, store):
    principal = make_principal(role="admin")
    store.create_session.return_value = Session(id="tok-2", principal=principal)
    store.get_current_session.side_effect = SessionNotFound("propagation delay")

    result = controller.login("admin@example.com", "secret")

    assert result.role is Role.admin
    assert controller.principal == principal


# ------------------------------------------------------------------
# Logout
# ------------------------------------------------------------------
def test_logout_clears_state(controller, store):
    _accept_login(store, make_principal(role="super_admin"))
    controller.login("boss@example.com", "secret")

    redirect = controller.logout()

    assert redirect == settings.SIGNIN_PATH
    assert controller.state is SessionState.anonymous
    assert controller.principal is None
    assert controller.permissions is None
    store.delete_session.assert_called_once_with("tok-1")
    for cap in Capability:
        assert controller.has_permission(cap) is False


def test_logout_clears_state_even_if_remote_fails(controller, store):
    _accept_login(store, make_principal(role="super_admin"))
    controller.login("boss@example.com", "secret")
    store.delete_session.side_effect = BackofficeError("network down")

    assert controller.logout() == settings.SIGNIN_PATH
    assert controller.state is SessionState.anonymous
    for cap in Capability:
        assert controller.has_permission(cap) is False


def test_logout_without_session_skips_remote_call(controller, store):
    controller.init(None)
    controller.logout()
    store.delete_session.assert_not_called()


# ------------------------------------------------------------------
# has_permission never raises
# ------------------------------------------------------------------
@pytest.mark.parametrize("name", ["canFly", "", None, 3])
def test_unknown_capability_is_false(controller, store, name):
    _accept_login(store, make_principal(role="super_admin"))
    controller.login("boss@example.com", "secret")

    assert controller.has_permission(name) is False
