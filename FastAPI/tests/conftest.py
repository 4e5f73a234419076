import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "test")

from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.rate_limiter import rate_limiter
from app.core.security import create_access_token
from app.database import Base, get_db
from app.dependencies import get_current_user
from app.main import app
from app.repos.job_order_repo import create as create_job_order
from app.repos.user_repo import create as create_user


@dataclass
class StubProfile:
    id: str = "profile-1"
    user_id: str = "user-1"
    first_name: str | None = "Maria"
    last_name: str | None = "Santos"
    phone: str | None = None
    nationality: str | None = "PH"
    date_of_birth: object | None = None
    trust_score: int = 50
    reward_points: int = 0
    ai_generated_cv: dict | None = None


@dataclass
class StubEmployer:
    id: str = "employer-1"
    user_id: str = "employer-user-1"
    company_name: str = "Acme Manpower"
    contact_person: str | None = "Jo Reyes"
    phone: str | None = None
    country: str | None = "PH"
    is_verified: bool = False
    trust_score: int = 50
    total_hires: int = 0
    verification_docs: list = field(default_factory=list)


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "user@example.com"
    role: str = "APPLICANT"
    is_active: bool = True
    is_email_verified: bool = True
    password_hash: str = "hashed-password"
    profile: StubProfile | None = None
    employer: StubEmployer | None = None


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def applicant_user() -> StubUser:
    return StubUser(profile=StubProfile())


@pytest.fixture
def employer_user() -> StubUser:
    return StubUser(id="employer-user-1", email="hr@acme.example", role="EMPLOYER", employer=StubEmployer())


@pytest.fixture
def admin_user() -> StubUser:
    return StubUser(id="admin-1", email="admin@example.com", role="ADMIN")


def _client_for(user):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
    return TestClient(app)


@pytest.fixture
def client(applicant_user: StubUser):
    yield _client_for(applicant_user)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    yield _client_for(None)
    app.dependency_overrides.clear()


@pytest.fixture
def employer_client(employer_user: StubUser):
    yield _client_for(employer_user)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_user: StubUser):
    yield _client_for(admin_user)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """A fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def api(db_session):
    """TestClient wired to the SQLite session; callers authenticate with real bearer tokens."""

    def _db_override():
        yield db_session

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


class Seeder:
    """Creates persisted users/job orders through the repos for SQLite-backed tests."""

    def __init__(self, db):
        self.db = db
        self._n = 0

    def _email(self, prefix: str) -> str:
        self._n += 1
        return f"{prefix}{self._n}@example.com"

    def applicant(self, first_name="Maria", last_name="Santos", **kwargs):
        return create_user(
            self.db,
            email=kwargs.pop("email", None) or self._email("applicant"),
            password=kwargs.pop("password", "password123"),
            role="APPLICANT",
            first_name=first_name,
            last_name=last_name,
            is_email_verified=kwargs.pop("is_email_verified", True),
            **kwargs,
        )

    def employer(self, company_name="Acme Manpower", contact_person="Jo Reyes", **kwargs):
        return create_user(
            self.db,
            email=kwargs.pop("email", None) or self._email("employer"),
            password=kwargs.pop("password", "password123"),
            role="EMPLOYER",
            first_name=company_name,
            last_name=contact_person,
            is_email_verified=kwargs.pop("is_email_verified", True),
            **kwargs,
        )

    def admin(self, email=None, password="password123"):
        return create_user(
            self.db,
            email=email or self._email("admin"),
            password=password,
            role="ADMIN",
            is_email_verified=True,
        )

    def job_order(self, employer_user, title="Caregiver", positions=1, status="ACTIVE", **kwargs):
        return create_job_order(
            self.db,
            employer_user.employer.id,
            title=title,
            description=kwargs.pop("description", f"{title} role"),
            location=kwargs.pop("location", "Riyadh"),
            positions=positions,
            status=status,
            **kwargs,
        )


@pytest.fixture
def seed(db_session) -> Seeder:
    return Seeder(db_session)


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def bearer():
    return auth_header
