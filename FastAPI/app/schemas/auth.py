from datetime import date, datetime
from typing import Any

from pydantic import EmailStr, Field, field_validator

from app.models.enums import UserRole
from app.schemas.common import CamelModel

SIGN_UP_ROLES = (UserRole.APPLICANT.value, UserRole.EMPLOYER.value)


class SignUpRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=40)
    password: str
    role: str

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    @field_validator("role")
    @classmethod
    def role_allowed(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if v not in SIGN_UP_ROLES:
            raise ValueError("Invalid role. Must be APPLICANT or EMPLOYER")
        return v


class SignInRequest(CamelModel):
    email: EmailStr
    password: str


class VerifyEmailRequest(CamelModel):
    email: EmailStr
    otp: str = Field(min_length=4, max_length=10)


class ResendOtpRequest(CamelModel):
    email: EmailStr


class ProfileOut(CamelModel):
    id: str
    user_id: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    nationality: str | None = None
    date_of_birth: date | None = None
    trust_score: int = 50
    reward_points: int = 0
    ai_generated_cv: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployerOut(CamelModel):
    id: str
    user_id: str
    company_name: str
    contact_person: str | None = None
    phone: str | None = None
    country: str | None = None
    is_verified: bool = False
    trust_score: int = 50
    total_hires: int = 0
    verification_docs: list[dict[str, Any]] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserOut(CamelModel):
    id: str
    email: str
    role: str
    is_active: bool = True
    is_email_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    profile: ProfileOut | None = None
    employer: EmployerOut | None = None


class SessionOut(CamelModel):
    token: str
    user: UserOut


class VerificationPending(CamelModel):
    requires_verification: bool = True
    email: str
    dev_otp: str | None = None
