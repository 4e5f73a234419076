from datetime import date, datetime
from typing import Any

from pydantic import Field

from app.schemas.common import CamelModel


class ProfileUpdate(CamelModel):
    """Partial update: omitted fields are untouched, explicit null clears."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=40)
    nationality: str | None = Field(default=None, max_length=80)
    date_of_birth: date | None = None
    # CV fields, merged into the CV document
    bio: str | None = None
    skills: list[Any] | None = None
    experience: list[Any] | None = None
    education: list[Any] | None = None
    certifications: list[Any] | None = None


PROFILE_FIELDS = ("first_name", "last_name", "phone", "nationality", "date_of_birth")
CV_FIELDS = {"bio": "summary", "skills": "skills", "experience": "experience", "education": "education", "certifications": "certifications"}


class ComplaintCreate(CamelModel):
    category: str | None = None
    subject: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)


class ComplaintOut(CamelModel):
    id: str
    applicant_id: str
    category: str
    description: str
    status: str
    escalation_level: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JobListingOut(CamelModel):
    id: str
    title: str
    employer: str | None = None
    location: str
    salary: float | None = None
    positions: int | None = None
    description: str | None = None
    requirements: dict[str, Any] | None = None
    status: str | None = None
    created_at: datetime | None = None


class JobOrderSummary(CamelModel):
    id: str
    title: str
    location: str
    salary: float | None = None
    status: str
    employer: str | None = None


class ApplicationOut(CamelModel):
    id: str
    applicant_id: str
    job_order_id: str
    status: str
    ai_match_score: float | None = None
    shortlisted_at: datetime | None = None
    interviewed_at: datetime | None = None
    selected_at: datetime | None = None
    deployed_at: datetime | None = None
    interview_notes: str | None = None
    video_interview_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ApplicantApplicationOut(ApplicationOut):
    job_order: JobOrderSummary | None = None
    position: str | None = None
    employer: str | None = None
    location: str | None = None
    salary: float | None = None


def _employer_name(job_order) -> str | None:
    employer = getattr(job_order, "employer", None)
    return employer.company_name if employer is not None else None


def job_order_summary(job_order) -> JobOrderSummary:
    return JobOrderSummary(
        id=job_order.id,
        title=job_order.title,
        location=job_order.location,
        salary=job_order.salary,
        status=job_order.status,
        employer=_employer_name(job_order),
    )


def job_listing_view(job_order) -> JobListingOut:
    return JobListingOut(
        id=job_order.id,
        title=job_order.title,
        employer=_employer_name(job_order),
        location=job_order.location,
        salary=job_order.salary,
        positions=job_order.positions,
        description=job_order.description,
        requirements=job_order.requirements,
        status=job_order.status,
        created_at=job_order.created_at,
    )


def applicant_application_view(application) -> ApplicantApplicationOut:
    """An application as its applicant sees it, with the job order flattened in."""
    base = ApplicationOut.model_validate(application).model_dump()
    job_order = application.job_order
    if job_order is None:
        return ApplicantApplicationOut(**base)
    summary = job_order_summary(job_order)
    return ApplicantApplicationOut(
        **base,
        job_order=summary,
        position=summary.title,
        employer=summary.employer,
        location=summary.location,
        salary=summary.salary,
    )
