import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.core.scoping import AuthContext
from app.database import get_db
from app.dependencies import get_employer_context
from app.models.enums import ApplicationStatus, JobOrderStatus
from app.repos import application_repo, employer_repo, job_order_repo
from app.schemas.applicant import ApplicationOut
from app.schemas.auth import EmployerOut
from app.schemas.employer import (
    REQUIRED_JOB_ORDER_FIELDS,
    DocumentCreate,
    EmployerUpdate,
    InterviewFeedbackRequest,
    JobOrderCreate,
    JobOrderOut,
    JobOrderUpdate,
    PricingItem,
    StatusUpdateRequest,
    candidate_detail_view,
    candidate_summary_view,
    interview_view,
    job_order_detail_view,
    recent_candidate_view,
    upcoming_interview_view,
)
from app.services.application_workflow import record_interview_feedback, transition_application
from app.services.fulfillment import INTERVIEW_STATUSES, job_order_fulfillment

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer", tags=["employer"])

# Applications that have reached the interview stage or gone past it
INTERVIEW_STAGE = (
    ApplicationStatus.SHORTLISTED.value,
    ApplicationStatus.INTERVIEWED.value,
    ApplicationStatus.SELECTED.value,
    ApplicationStatus.PROCESSING.value,
    ApplicationStatus.DEPLOYED.value,
)
DASHBOARD_PREVIEW_LIMIT = 5

PRICING = (
    PricingItem(item="Placement fee (per worker)", amount=500, unit="USD", note="One-time"),
    PricingItem(item="Document verification", amount=50, unit="USD", note="Per batch"),
    PricingItem(item="Video interview slot", amount=0, unit="-", note="Unlimited included"),
    PricingItem(item="Priority sourcing (optional)", amount=200, unit="USD", note="Per job order"),
)


def _employer(db: Session, ctx: AuthContext):
    employer = employer_repo.get_by_id(db, ctx.employer_id)
    if not employer:
        raise NotFoundError("Employer profile not found")
    return employer


def _job_order(db: Session, ctx: AuthContext, job_order_id: str):
    job_order = job_order_repo.get_scoped(db, ctx, job_order_id)
    if not job_order:
        raise NotFoundError("Job order not found")
    return job_order


def _reject_nulls(supplied: dict, required: tuple[str, ...]) -> None:
    cleared = [name for name in required if name in supplied and supplied[name] is None]
    if cleared:
        raise ValidationError(f"{', '.join(cleared)} cannot be null")


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


def _profile_out(employer, email: str) -> dict:
    return {
        **_dump(EmployerOut.model_validate(employer)),
        "email": email,
        "verificationStatus": "approved" if employer.is_verified else "pending",
        "documents": employer_repo.documents(employer),
    }


@router.get("/profile")
def get_profile(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    return {"success": True, "data": _profile_out(_employer(db, ctx), ctx.user.email)}


@router.patch("/profile")
def update_profile(
    body: EmployerUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    supplied = body.model_dump(exclude_unset=True)
    _reject_nulls(supplied, ("company_name",))
    employer = employer_repo.update(db, _employer(db, ctx), supplied)
    logger.info("Employer %s updated fields=%s", employer.id, sorted(supplied))
    return {"success": True, "data": _profile_out(employer, ctx.user.email)}


@router.get("/job-orders")
def list_job_orders(
    status: str | None = None,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    job_orders, _ = job_order_repo.list_scoped(db, ctx, status=status.upper() if status else None)
    return {"success": True, "data": [_dump(JobOrderOut.model_validate(j)) for j in job_orders]}


@router.post("/job-orders", status_code=status.HTTP_201_CREATED)
def create_job_order(
    body: JobOrderCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    job_order = job_order_repo.create(db, ctx.employer_id, **body.model_dump())
    logger.info("Job order %s created by employer %s (positions=%d)", job_order.id, ctx.employer_id, job_order.positions)
    return {"success": True, "data": _dump(JobOrderOut.model_validate(job_order))}


@router.get("/job-orders/{job_order_id}")
def get_job_order(
    job_order_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    """Job order with its candidates, per-status counts and fulfillment accounting."""
    job_order = _job_order(db, ctx, job_order_id)
    applications = application_repo.list_scoped(db, ctx, job_order_id=job_order.id)
    fulfillment = job_order_fulfillment(db, job_order)
    return {"success": True, "data": _dump(job_order_detail_view(job_order, applications, fulfillment))}


@router.put("/job-orders/{job_order_id}")
@router.patch("/job-orders/{job_order_id}")
def update_job_order(
    job_order_id: str,
    body: JobOrderUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    """Partial update: omitted fields stay, explicit null clears optional fields only."""
    supplied = body.model_dump(exclude_unset=True)
    _reject_nulls(supplied, REQUIRED_JOB_ORDER_FIELDS)
    job_order = job_order_repo.update(db, _job_order(db, ctx, job_order_id), supplied)
    logger.info("Job order %s updated fields=%s", job_order.id, sorted(supplied))
    return {"success": True, "data": _dump(JobOrderOut.model_validate(job_order))}


@router.delete("/job-orders/{job_order_id}")
def delete_job_order(
    job_order_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    job_order = _job_order(db, ctx, job_order_id)
    job_order_repo.delete(db, job_order)
    logger.info("Job order %s deleted by employer %s", job_order_id, ctx.employer_id)
    return {"success": True, "message": "Job order deleted"}


@router.get("/candidates")
def list_candidates(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    """One entry per applicant across the employer's job orders, from their latest application."""
    seen: dict[str, object] = {}
    for application in application_repo.list_scoped(db, ctx):
        seen.setdefault(application.applicant_id, application)
    return {"success": True, "data": [_dump(candidate_summary_view(a)) for a in seen.values()]}


@router.get("/candidates/{applicant_id}")
def get_candidate(
    applicant_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    applications = [a for a in application_repo.list_scoped(db, ctx) if a.applicant_id == applicant_id]
    if not applications:
        raise NotFoundError("Candidate not found")
    return {"success": True, "data": _dump(candidate_detail_view(applications))}


@router.get("/interviews")
def list_interviews(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    applications = application_repo.list_scoped(db, ctx, statuses=INTERVIEW_STAGE)
    return {"success": True, "data": [_dump(interview_view(a)) for a in applications]}


@router.patch("/interviews/{application_id}/rating")
def rate_interview(
    application_id: str,
    body: InterviewFeedbackRequest,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    # The rating itself is echoed back, not stored
    application = record_interview_feedback(db, ctx, application_id, body.notes)
    return {
        "success": True,
        "data": {"applicationId": application.id, "rating": body.rating, "notes": application.interview_notes},
    }


@router.patch("/applications/{application_id}/status")
def update_application_status(
    application_id: str,
    body: StatusUpdateRequest,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    application = transition_application(db, ctx, application_id, body.status, body.notes)
    return {"success": True, "data": _dump(ApplicationOut.model_validate(application))}


@router.get("/documents")
def list_documents(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    return {"success": True, "data": employer_repo.documents(_employer(db, ctx))}


@router.post("/documents", status_code=status.HTTP_201_CREATED)
def add_document(
    body: DocumentCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_employer_context),
):
    doc = employer_repo.add_document(db, _employer(db, ctx), body.name)
    logger.info("Verification document %s added for employer %s", doc["id"], ctx.employer_id)
    return {"success": True, "data": doc}


@router.get("/dashboard-stats")
def dashboard_stats(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    return {
        "success": True,
        "data": {
            "activeJobOrders": job_order_repo.count_scoped(db, ctx, status=JobOrderStatus.ACTIVE.value),
            "candidateCount": application_repo.count_scoped(db, ctx),
            "interviewCount": application_repo.count_scoped(db, ctx, statuses=INTERVIEW_STATUSES),
            "deployedCount": application_repo.count_scoped(db, ctx, status=ApplicationStatus.DEPLOYED.value),
        },
    }


@router.get("/upcoming-interviews")
def upcoming_interviews(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    """Up to five candidates waiting on or through an interview, for the dashboard card."""
    applications = application_repo.list_scoped(
        db, ctx, statuses=INTERVIEW_STATUSES, limit=DASHBOARD_PREVIEW_LIMIT
    )
    return {"success": True, "data": [_dump(upcoming_interview_view(a)) for a in applications]}


@router.get("/recent-candidates")
def recent_candidates(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_employer_context)):
    applications = application_repo.list_scoped(db, ctx, limit=DASHBOARD_PREVIEW_LIMIT)
    return {"success": True, "data": [_dump(recent_candidate_view(a)) for a in applications]}


@router.get("/pricing")
def pricing(ctx: AuthContext = Depends(get_employer_context)):
    return {"success": True, "data": {"items": [_dump(item) for item in PRICING]}}
