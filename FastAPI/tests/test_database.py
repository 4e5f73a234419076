import pytest
from sqlalchemy import inspect

import app.database as dbmod


def test_get_db_closes_session(monkeypatch):
    class _DB:
        def __init__(self):
            self.closed = False

        def close(self):
            self.closed = True

    inst = _DB()
    monkeypatch.setattr(dbmod, "SessionLocal", lambda: inst)
    gen = dbmod.get_db()
    got = next(gen)
    assert got is inst
    with pytest.raises(StopIteration):
        next(gen)
    assert inst.closed is True


def test_engine_kwargs_for_sqlite_and_postgres():
    sqlite_kwargs = dbmod._engine_kwargs("sqlite://")
    assert sqlite_kwargs["connect_args"] == {"check_same_thread": False}
    assert dbmod._engine_kwargs("postgresql://u:p@localhost/db") == {"pool_pre_ping": True}


def test_init_db_success_and_failure(monkeypatch):
    class _Meta:
        def create_all(self, bind):
            return None

    monkeypatch.setattr(dbmod.Base, "metadata", _Meta())
    dbmod.init_db()

    class _MetaFail:
        def create_all(self, bind):
            raise RuntimeError("db fail")

    monkeypatch.setattr(dbmod.Base, "metadata", _MetaFail())
    with pytest.raises(RuntimeError):
        dbmod.init_db()


def test_ensure_tables_exist_creates_only_missing(monkeypatch):
    class _Inspector:
        def get_table_names(self):
            return ["users"]

    class _Meta:
        tables = {"users": object(), "job_orders": object()}

        def create_all(self, bind):
            return None

    monkeypatch.setattr(dbmod, "inspect", lambda _engine: _Inspector())
    monkeypatch.setattr(dbmod.Base, "metadata", _Meta())
    dbmod.ensure_tables_exist()


def test_ensure_tables_exist_failure(monkeypatch):
    def _boom(_engine):
        raise RuntimeError("inspect failed")

    monkeypatch.setattr(dbmod, "inspect", _boom)
    with pytest.raises(RuntimeError):
        dbmod.ensure_tables_exist()


def test_schema_has_all_tables_and_unique_application_pair(db_session):
    insp = inspect(db_session.get_bind())
    assert set(insp.get_table_names()) >= {
        "users", "profiles", "employers", "job_orders", "applications", "complaints",
    }
    uniques = insp.get_unique_constraints("applications")
    assert any(set(u["column_names"]) == {"applicant_id", "job_order_id"} for u in uniques)
