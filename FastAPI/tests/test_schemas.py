import pytest
from pydantic import ValidationError

from app.schemas.admin import UserStatusUpdate
from app.schemas.applicant import ProfileUpdate
from app.schemas.auth import SignUpRequest, VerificationPending
from app.schemas.employer import JobOrderCreate, JobOrderUpdate, StatusUpdateRequest, applicant_name
from conftest import StubProfile


def test_sign_up_role_and_password_validators():
    ok = SignUpRequest(firstName="A", lastName="B", email="a@example.com", password="password1", role=" employer ")
    assert ok.role == "EMPLOYER"
    with pytest.raises(ValidationError):
        SignUpRequest(firstName="A", lastName="B", email="a@example.com", password="password1", role="ADMIN")
    with pytest.raises(ValidationError):
        SignUpRequest(firstName="A", lastName="B", email="a@example.com", password="short", role="APPLICANT")
    with pytest.raises(ValidationError):
        SignUpRequest(firstName="A", lastName="B", email="not-an-email", password="password1", role="APPLICANT")


def test_camel_case_in_and_out():
    pending = VerificationPending(email="a@example.com", dev_otp="123456")
    assert pending.model_dump(by_alias=True) == {
        "requiresVerification": True,
        "email": "a@example.com",
        "devOtp": "123456",
    }
    assert UserStatusUpdate(isActive=False).is_active is False
    assert UserStatusUpdate(is_active=True).is_active is True


def test_partial_update_tracks_explicit_nulls():
    update = ProfileUpdate.model_validate({"phone": None, "bio": "x"})
    assert update.model_dump(exclude_unset=True) == {"phone": None, "bio": "x"}
    assert ProfileUpdate().model_dump(exclude_unset=True) == {}


def test_job_order_status_normalized():
    create = JobOrderCreate(title="t", description="d", location="l")
    assert create.status == "ACTIVE"
    assert create.positions == 1
    assert JobOrderUpdate(status=" expired ").status == "EXPIRED"
    assert JobOrderUpdate(title="x").model_dump(exclude_unset=True) == {"title": "x"}
    with pytest.raises(ValidationError):
        JobOrderUpdate(status="OPEN")
    with pytest.raises(ValidationError):
        JobOrderCreate(title="", description="d", location="l")


def test_status_update_keeps_raw_status_for_the_workflow():
    assert StatusUpdateRequest(status="shortlisted").status == "shortlisted"


def test_applicant_name_joins_present_parts_or_falls_back():
    assert applicant_name(StubProfile(first_name="Maria", last_name="Santos")) == "Maria Santos"
    assert applicant_name(StubProfile(first_name=None, last_name="Santos")) == "Santos"
    assert applicant_name(StubProfile(first_name=None, last_name=None)) == "Applicant"
    assert applicant_name(None) == "Applicant"
