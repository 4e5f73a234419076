import pytest

import app.scripts.ensure_tables as ensure_tables
import app.scripts.seed_admin as seed_admin
from app.core.security import verify_password


def test_seed_admin_creates_then_updates(db_session):
    user, created = seed_admin.seed_admin(db_session, "root@example.com", "first-password")
    assert created is True
    assert user.role == "ADMIN"
    assert user.is_email_verified is True
    assert user.profile is None

    user, created = seed_admin.seed_admin(db_session, "root@example.com", "second-password")
    assert created is False
    assert verify_password("second-password", user.password_hash)


def test_seed_admin_refreshes_existing_admin(db_session, seed):
    existing = seed.admin(email="root@example.com")
    existing.is_active = False
    db_session.commit()
    user, created = seed_admin.seed_admin(db_session, "root@example.com", "new-password")
    assert created is False
    assert user.is_active is True
    assert verify_password("new-password", user.password_hash)


def test_seed_admin_refuses_to_change_an_applicant_role(db_session, seed):
    existing = seed.applicant(email="maria@example.com")
    with pytest.raises(seed_admin.SeedAdminError) as ex:
        seed_admin.seed_admin(db_session, "maria@example.com", "password123")
    assert "APPLICANT" in str(ex.value)
    db_session.refresh(existing)
    assert existing.role == "APPLICANT"
    assert existing.profile is not None
    assert verify_password("password123", existing.password_hash)


def test_seed_admin_main_exits_non_zero_for_non_admin_email(monkeypatch, capsys):
    class _DB:
        def close(self):
            pass

    def _refuse(db, email, pw):
        raise seed_admin.SeedAdminError(f"{email} belongs to an EMPLOYER account")

    monkeypatch.setattr(seed_admin, "ensure_tables_exist", lambda: None)
    monkeypatch.setattr(seed_admin, "SessionLocal", _DB)
    monkeypatch.setattr(seed_admin, "seed_admin", _refuse)
    with pytest.raises(SystemExit) as ex:
        seed_admin.main()
    assert ex.value.code == 1
    assert "EMPLOYER account" in capsys.readouterr().out


def test_seed_admin_main_uses_settings(monkeypatch, capsys):
    calls = {}

    class _DB:
        def close(self):
            calls["closed"] = True

    monkeypatch.setattr(seed_admin, "ensure_tables_exist", lambda: None)
    monkeypatch.setattr(seed_admin, "SessionLocal", _DB)
    monkeypatch.setattr(seed_admin.settings, "admin_email", " Admin@Example.com ")
    monkeypatch.setattr(seed_admin, "seed_admin", lambda db, email, pw: (calls.update(email=email), True))
    seed_admin.main()
    assert calls == {"email": "admin@example.com", "closed": True}
    assert "Created admin account" in capsys.readouterr().out


def test_ensure_tables_main(monkeypatch, capsys):
    called = {}
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: called.update(ok=True))
    ensure_tables.main()
    assert called["ok"] is True
    assert "DB table check complete" in capsys.readouterr().out
