"""Tests for services/access (visibility and role gate)"""

from types import SimpleNamespace

import pytest

from elakitty.errors import AuthenticationError, AuthorizationError
from elakitty.models.enums import Role, Visibility
from elakitty.services.access.role_gate import ADMIN_ACTIONS, Action, authorize, is_allowed
from elakitty.services.access.viewer import Viewer
from elakitty.services.access.visibility import can_delete, can_view

ANON = Viewer.anonymous()
USER = Viewer(id="u1", role=Role.USER)
CAREGIVER = Viewer(id="c1", role=Role.CAREGIVER)
ADMIN = Viewer(id="a1", role=Role.ADMIN)


def sighting(visibility, owner_id="someone-else"):
    return SimpleNamespace(visibility=visibility, owner_id=owner_id)


@pytest.mark.parametrize(
    "visibility,viewer,expected",
    [
        (Visibility.PUBLIC, ANON, True),
        (Visibility.PUBLIC, USER, True),
        (Visibility.PUBLIC, CAREGIVER, True),
        (Visibility.PUBLIC, ADMIN, True),
        (Visibility.CAREGIVER_ONLY, ANON, False),
        (Visibility.CAREGIVER_ONLY, USER, False),
        (Visibility.CAREGIVER_ONLY, CAREGIVER, True),
        (Visibility.CAREGIVER_ONLY, ADMIN, True),
        (Visibility.ADMIN_ONLY, ANON, False),
        (Visibility.ADMIN_ONLY, USER, False),
        (Visibility.ADMIN_ONLY, CAREGIVER, False),
        (Visibility.ADMIN_ONLY, ADMIN, True),
    ],
)
def test_visibility_matrix(visibility, viewer, expected):
    assert can_view(sighting(visibility), viewer) is expected


def test_owner_always_sees_own_sighting():
    assert can_view(sighting(Visibility.ADMIN_ONLY, owner_id="u1"), USER)
    assert can_view(sighting(Visibility.CAREGIVER_ONLY, owner_id="u1"), USER)


def test_stored_string_visibility_is_accepted():
    assert can_view(sighting("caregiver"), CAREGIVER)
    assert not can_view(sighting("admin"), CAREGIVER)


def test_anonymous_never_owns():
    assert not can_view(sighting(Visibility.ADMIN_ONLY, owner_id=None), ANON)
    assert not can_delete(sighting(Visibility.PUBLIC, owner_id=None), ANON)


def test_only_owner_may_delete():
    s = sighting(Visibility.PUBLIC, owner_id="u1")
    assert can_delete(s, USER)
    assert not can_delete(s, ADMIN)
    assert not can_delete(s, CAREGIVER)


@pytest.mark.parametrize("action", sorted(ADMIN_ACTIONS, key=lambda a: a.value))
def test_admin_actions(action):
    assert is_allowed(Role.ADMIN, action)
    for role in (Role.ANONYMOUS, Role.USER, Role.CAREGIVER):
        assert not is_allowed(role, action)


def test_dashboard_open_to_caregivers():
    assert is_allowed(Role.ADMIN, Action.VIEW_DASHBOARD)
    assert is_allowed(Role.CAREGIVER, Action.VIEW_DASHBOARD)
    assert not is_allowed(Role.USER, Action.VIEW_DASHBOARD)
    assert not is_allowed(Role.ANONYMOUS, Action.VIEW_DASHBOARD)


def test_authorize_distinguishes_anonymous_from_forbidden():
    with pytest.raises(AuthenticationError):
        authorize(ANON, Action.SAVE_SANCTUARY)
    with pytest.raises(AuthorizationError):
        authorize(USER, Action.SAVE_SANCTUARY)
    with pytest.raises(AuthorizationError):
        authorize(CAREGIVER, Action.SWITCH_ROLE)
    assert authorize(ADMIN, Action.SWITCH_ROLE) is ADMIN
