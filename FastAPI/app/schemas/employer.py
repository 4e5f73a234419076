from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from app.models.enums import JobOrderStatus
from app.schemas.common import CamelModel
from app.services.profile_scoring import cv_document, experience_label

JOB_ORDER_STATUSES = tuple(s.value for s in JobOrderStatus)
REQUIRED_JOB_ORDER_FIELDS = ("title", "description", "location", "positions", "status")


def _normalize_job_status(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip().upper()
    if v not in JOB_ORDER_STATUSES:
        raise ValueError(f"Invalid job order status. Must be one of: {', '.join(JOB_ORDER_STATUSES)}")
    return v


class EmployerUpdate(CamelModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=200)
    contact_person: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=40)
    country: str | None = Field(default=None, max_length=80)


class JobOrderCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    location: str = Field(min_length=1, max_length=200)
    requirements: dict[str, Any] | None = None
    salary: float | None = Field(default=None, ge=0)
    positions: int = Field(default=1, ge=1)
    status: str = JobOrderStatus.ACTIVE.value

    @field_validator("status")
    @classmethod
    def status_allowed(cls, v: str | None) -> str | None:
        return _normalize_job_status(v)


class JobOrderUpdate(CamelModel):
    """Partial update. Nulls are only accepted for clearable fields."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1, max_length=200)
    requirements: dict[str, Any] | None = None
    salary: float | None = Field(default=None, ge=0)
    positions: int | None = Field(default=None, ge=1)
    status: str | None = None

    @field_validator("status")
    @classmethod
    def status_allowed(cls, v: str | None) -> str | None:
        return _normalize_job_status(v)


class JobOrderOut(CamelModel):
    id: str
    employer_id: str
    title: str
    description: str
    requirements: dict[str, Any] | None = None
    salary: float | None = None
    location: str
    positions: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StatusUpdateRequest(CamelModel):
    status: str
    notes: str | None = Field(default=None, max_length=5000)


class InterviewFeedbackRequest(CamelModel):
    rating: int | None = Field(default=None, ge=0, le=5)
    notes: str | None = Field(default=None, max_length=5000)


class DocumentCreate(CamelModel):
    name: str = Field(default="Document", min_length=1, max_length=255)


class CandidateOut(CamelModel):
    id: str
    application_id: str
    name: str
    status: str
    ai_match_score: float | None = None
    applied_at: datetime | None = None


class JobOrderDetailOut(JobOrderOut):
    candidates: list[CandidateOut] = []
    status_counts: dict[str, int] = {}
    applicant_count: int = 0
    fulfillment: dict[str, Any] = {}


def applicant_name(profile) -> str:
    if profile is None:
        return "Applicant"
    return " ".join(p for p in (profile.first_name, profile.last_name) if p) or "Applicant"


def candidate_view(application) -> CandidateOut:
    return CandidateOut(
        id=application.applicant_id,
        application_id=application.id,
        name=applicant_name(application.applicant),
        status=application.status,
        ai_match_score=application.ai_match_score,
        applied_at=application.created_at,
    )


def job_order_detail_view(job_order, applications, fulfillment) -> JobOrderDetailOut:
    base = JobOrderOut.model_validate(job_order).model_dump()
    return JobOrderDetailOut(
        **base,
        candidates=[candidate_view(a) for a in applications],
        status_counts=fulfillment.status_counts,
        applicant_count=fulfillment.applicant_count,
        fulfillment=fulfillment.as_dict(),
    )


class CandidateSummaryOut(CamelModel):
    id: str
    name: str
    position: str | None = None
    nationality: str | None = None
    experience: str
    skills: list[Any] = []
    status: str
    ai_recommended: bool = False


class CandidateDetailOut(CandidateSummaryOut):
    phone: str | None = None
    certifications: list[Any] = []
    match_score: float = 0
    interview_notes: str | None = None
    applications: list[CandidateOut] = []


class InterviewOut(CamelModel):
    id: str
    application_id: str
    candidate_name: str
    position: str | None = None
    date: datetime | None = None
    status: str
    video_link: str | None = None
    notes: str | None = None


AI_RECOMMENDED_SCORE = 80


def candidate_summary_view(application) -> CandidateSummaryOut:
    """One applicant as an employer's candidate, seen through their latest application."""
    profile = application.applicant
    cv = cv_document(profile)
    return CandidateSummaryOut(
        id=application.applicant_id,
        name=applicant_name(profile),
        position=application.job_order.title if application.job_order else None,
        nationality=profile.nationality if profile else None,
        experience=experience_label(cv),
        skills=cv.get("skills") or cv.get("skillTags") or [],
        status=application.status.lower(),
        ai_recommended=(application.ai_match_score or 0) >= AI_RECOMMENDED_SCORE,
    )


def candidate_detail_view(applications) -> CandidateDetailOut:
    latest = applications[0]
    profile = latest.applicant
    cv = cv_document(profile)
    return CandidateDetailOut(
        **candidate_summary_view(latest).model_dump(),
        phone=profile.phone if profile else None,
        certifications=cv.get("certifications") or [],
        match_score=latest.ai_match_score or 0,
        interview_notes=latest.interview_notes,
        applications=[candidate_view(a) for a in applications],
    )


def interview_view(application) -> InterviewOut:
    return InterviewOut(
        id=application.id,
        application_id=application.id,
        candidate_name=applicant_name(application.applicant),
        position=application.job_order.title if application.job_order else None,
        date=application.interviewed_at or application.shortlisted_at or application.created_at,
        status="completed" if application.interviewed_at else "scheduled",
        video_link=application.video_interview_url,
        notes=application.interview_notes,
    )


class UpcomingInterviewOut(CamelModel):
    id: str
    candidate_name: str
    position: str | None = None
    date: datetime | None = None


class RecentCandidateOut(CamelModel):
    id: str
    name: str
    position: str | None = None
    location: str = ""
    nationality: str = ""


class PricingItem(CamelModel):
    item: str
    amount: float
    unit: str
    note: str


def upcoming_interview_view(application) -> UpcomingInterviewOut:
    return UpcomingInterviewOut(
        id=application.id,
        candidate_name=applicant_name(application.applicant),
        position=application.job_order.title if application.job_order else None,
        date=application.interviewed_at or application.created_at,
    )


def recent_candidate_view(application) -> RecentCandidateOut:
    profile = application.applicant
    nationality = (profile.nationality if profile else None) or ""
    return RecentCandidateOut(
        id=application.applicant_id,
        name=applicant_name(profile),
        position=application.job_order.title if application.job_order else None,
        location=nationality,
        nationality=nationality,
    )
