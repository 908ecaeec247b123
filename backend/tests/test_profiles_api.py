"""Tests for role switching, profiles and sessions"""

import importlib.util
from pathlib import Path

import pytest

from conftest import radius_payload
from elakitty.config import settings
from elakitty.crud import profile as crud
from elakitty.crud import sanctuary as crud_sanctuary
from elakitty.errors import ValidationError
from elakitty.models.auth_session import AuthSession
from elakitty.models.caregiver_assignment import CaregiverAssignment
from elakitty.models.enums import Role
from elakitty.models.profile import Profile
from elakitty.schemas.sanctuary import SanctuaryIn


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


def test_admin_switches_roles(client, admin_headers, make_profile, db):
    user = make_profile("user@example.org")

    r = client.patch(f"/profiles/{user.id}/role", json={"role": "caregiver"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "caregiver"

    db.expire_all()
    assert db.get(Profile, user.id).role is Role.CAREGIVER
    carers = client.get("/profiles/caregivers", headers=admin_headers).json()
    assert [p["email"] for p in carers] == ["user@example.org"]


def test_anonymous_role_cannot_be_assigned(client, admin_headers, make_profile):
    user = make_profile("user@example.org")
    r = client.patch(f"/profiles/{user.id}/role", json={"role": "anonymous"}, headers=admin_headers)
    assert r.status_code == 422
    r = client.patch(f"/profiles/{user.id}/role", json={"role": "owner"}, headers=admin_headers)
    assert r.status_code == 422


def test_unknown_profile(client, admin_headers):
    r = client.patch("/profiles/missing/role", json={"role": "admin"}, headers=admin_headers)
    assert r.status_code == 404


def test_only_admins_switch_roles(client, make_profile, auth_headers, db):
    user = make_profile("user@example.org")
    carer = make_profile("carer@example.org", Role.CAREGIVER)

    for headers in (auth_headers(user), auth_headers(carer)):
        r = client.patch(f"/profiles/{user.id}/role", json={"role": "admin"}, headers=headers)
        assert r.status_code == 403
    assert client.patch(f"/profiles/{user.id}/role", json={"role": "admin"}).status_code == 401

    db.expire_all()
    assert db.get(Profile, user.id).role is Role.USER


def test_demoted_caregiver_loses_assignments(client, admin_headers, make_profile, db):
    carer = make_profile("carer@example.org", Role.CAREGIVER)
    r = client.post("/sanctuaries", json=radius_payload(caregiver_ids=[carer.id]), headers=admin_headers)
    assert r.json()["caregiver_ids"] == [carer.id]

    client.patch(f"/profiles/{carer.id}/role", json={"role": "user"}, headers=admin_headers)

    db.expire_all()
    assert db.query(CaregiverAssignment).count() == 0


def test_dashboard_profile_list(client, admin_headers, make_profile, auth_headers):
    user = make_profile("user@example.org")
    assert len(client.get("/profiles", headers=admin_headers).json()) == 2
    assert client.get("/profiles", headers=auth_headers(user)).status_code == 403


def test_normalize_email():
    assert crud.normalize_email("  Someone@Example.ORG ") == "someone@example.org"
    for bad in ("", "someone", "@example.org", "someone@localhost"):
        with pytest.raises(ValidationError):
            crud.normalize_email(bad)


def test_dev_login_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "allow_dev_login", False)
    r = client.post("/auth/session", json={"email": "new@example.org"})
    assert r.status_code == 403


def test_dev_login_session_lifecycle(client, monkeypatch, db):
    monkeypatch.setattr(settings, "allow_dev_login", True)

    r = client.post("/auth/session", json={"email": "New@Example.org"})
    assert r.status_code == 200
    body = r.json()
    assert body["profile"]["email"] == "new@example.org"
    assert body["profile"]["role"] == "user"
    headers = {"Authorization": f"Bearer {body['token']}"}

    assert client.get("/auth/me", headers=headers).json()["id"] == body["profile"]["id"]

    # signing in again reuses the profile
    again = client.post("/auth/session", json={"email": "new@example.org"}).json()
    assert again["profile"]["id"] == body["profile"]["id"]

    assert client.delete("/auth/session", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401
    db.expire_all()
    assert db.query(AuthSession).count() == 1


def test_me_requires_session(client):
    assert client.get("/auth/me").status_code == 401


def test_apply_role_clears_assignments_of_former_caregiver(db, make_profile, admin_viewer):
    carer = make_profile("carer@example.org", Role.CAREGIVER)
    crud_sanctuary.save_sanctuary(db, admin_viewer, SanctuaryIn(**radius_payload(caregiver_ids=[carer.id])))
    assert db.query(CaregiverAssignment).count() == 1

    crud.apply_role(db, carer, Role.USER)
    assert carer.role is Role.USER
    assert db.query(CaregiverAssignment).count() == 0

    with pytest.raises(ValidationError):
        crud.apply_role(db, carer, Role.ANONYMOUS)


def load_create_session_script():
    path = Path(__file__).resolve().parents[2] / "scripts" / "create_session.py"
    spec = importlib.util.spec_from_file_location("create_session", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_create_session_script_demotes_through_role_rules(
    db, session_factory, make_profile, admin_viewer, monkeypatch, capsys
):
    carer = make_profile("carer@example.org", Role.CAREGIVER)
    crud_sanctuary.save_sanctuary(db, admin_viewer, SanctuaryIn(**radius_payload(caregiver_ids=[carer.id])))

    script = load_create_session_script()
    monkeypatch.setattr(script, "SessionLocal", session_factory)
    monkeypatch.setattr(script, "init_db", lambda: None)

    assert script.main(["carer@example.org", "--role", "user"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "carer@example.org (user)"

    db.expire_all()
    assert db.get(Profile, carer.id).role is Role.USER
    assert db.query(CaregiverAssignment).count() == 0
    assert db.get(AuthSession, out[1]) is not None
