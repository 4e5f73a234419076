import app.routers.admin as admin_mod
from conftest import StubEmployer, StubUser


def test_admin_routes_require_admin(client, employer_client):
    assert client.get("/admin/stats").status_code == 403
    assert employer_client.get("/admin/users").status_code == 403


def test_admin_stats(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod, "get_stats", lambda db: {"applicantCount": 3, "openComplaints": 1})
    resp = admin_client.get("/admin/stats")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"applicantCount": 3, "openComplaints": 1}}


def test_list_users_filters_role_and_clamps_page_size(monkeypatch, admin_client):
    seen = {}

    def _list(db, search=None, role=None, limit=20, offset=0):
        seen.update(search=search, role=role, limit=limit, offset=offset)
        return [StubUser(id="u9", email="a@example.com")], 41

    monkeypatch.setattr(admin_mod, "get_all_users_paginated", _list)
    resp = admin_client.get("/admin/users", params={"role": "employer", "page": 3, "limit": 1000})
    data = resp.json()["data"]
    assert seen == {"search": None, "role": "EMPLOYER", "limit": 100, "offset": 200}
    assert data["total"] == 41
    assert data["items"][0]["email"] == "a@example.com"


def test_admin_cannot_deactivate_self(admin_client):
    resp = admin_client.patch("/admin/users/admin-1/status", json={"isActive": False})
    assert resp.status_code == 400


def test_set_user_status(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod, "update_user", lambda db, uid, is_active=None: None)
    assert admin_client.patch("/admin/users/nope/status", json={"isActive": False}).status_code == 404

    target = StubUser(id="u2", is_active=True)

    def _update(db, uid, is_active=None):
        target.is_active = is_active
        return target

    monkeypatch.setattr(admin_mod, "update_user", _update)
    resp = admin_client.patch("/admin/users/u2/status", json={"isActive": False})
    assert resp.status_code == 200
    assert resp.json()["data"]["isActive"] is False


def test_employer_verification(monkeypatch, admin_client):
    employer = StubEmployer()
    monkeypatch.setattr(admin_mod.employer_repo, "get_by_id", lambda db, eid: employer if eid == "employer-1" else None)

    def _set(db, e, is_verified):
        e.is_verified = is_verified
        return e

    monkeypatch.setattr(admin_mod.employer_repo, "set_verified", _set)
    resp = admin_client.patch("/admin/employers/employer-1/verification", json={"isVerified": True})
    assert resp.json()["data"]["isVerified"] is True
    assert admin_client.patch("/admin/employers/x/verification", json={"isVerified": True}).status_code == 404


def test_application_detail_not_found(monkeypatch, admin_client):
    monkeypatch.setattr(admin_mod.application_repo, "get_scoped", lambda db, ctx, aid: None)
    assert admin_client.get("/admin/applications/missing").status_code == 404
