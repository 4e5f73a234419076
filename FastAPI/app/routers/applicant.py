import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.core.scoping import AuthContext
from app.database import get_db
from app.dependencies import get_applicant_context
from app.models.enums import JobOrderStatus
from app.repos import application_repo, complaint_repo, job_order_repo, profile_repo
from app.schemas.applicant import (
    CV_FIELDS,
    PROFILE_FIELDS,
    ApplicationOut,
    ComplaintCreate,
    ComplaintOut,
    JobListingOut,
    ProfileUpdate,
    applicant_application_view,
    job_listing_view,
)
from app.schemas.auth import ProfileOut
from app.schemas.common import Page
from app.services.application_intake import apply_to_job
from app.services.profile_scoring import generate_cv, match_score, profile_completion

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applicant", tags=["applicant"])

RECOMMENDED_LIMIT = 6

REWARD_CATALOG = (
    {"id": "training", "name": "Free training", "cost": 800, "type": "training"},
    {"id": "priority", "name": "Priority processing", "cost": 1000, "type": "service"},
    {"id": "discount", "name": "Medical / documentation discount", "cost": 600, "type": "discount"},
)


def _profile(db: Session, ctx: AuthContext):
    profile = profile_repo.get_by_id(db, ctx.profile_id)
    if not profile:
        raise NotFoundError("Applicant profile not found")
    return profile


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


def _profile_out(profile, email: str) -> dict:
    return {**_dump(ProfileOut.model_validate(profile)), "email": email}


@router.get("/profile")
def get_profile(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    return {"success": True, "data": _profile_out(_profile(db, ctx), ctx.user.email)}


@router.patch("/profile")
def update_profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    """Partial update. CV fields (bio, skills, ...) are merged into the CV document."""
    profile = _profile(db, ctx)
    supplied = body.model_dump(exclude_unset=True)
    fields = {k: v for k, v in supplied.items() if k in PROFILE_FIELDS}
    cv_updates = {CV_FIELDS[k]: v for k, v in supplied.items() if k in CV_FIELDS}
    profile = profile_repo.update(db, profile, fields, cv_updates)
    logger.info("Profile %s updated fields=%s", profile.id, sorted(supplied))
    return {"success": True, "data": _profile_out(profile, ctx.user.email)}


@router.get("/applications")
def list_applications(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    applications = application_repo.list_scoped(db, ctx)
    return {"success": True, "data": [_dump(applicant_application_view(a)) for a in applications]}


@router.get("/applications/{application_id}")
def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    application = application_repo.get_scoped(db, ctx, application_id)
    if not application:
        raise NotFoundError("Application not found")
    return {"success": True, "data": _dump(applicant_application_view(application))}


@router.get("/application-stats")
def application_stats(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    return {"success": True, "data": application_repo.status_counts_scoped(db, ctx)}


@router.get("/jobs")
def list_jobs(
    search: str | None = None,
    location: str | None = None,
    page: int = 1,
    limit: int = 12,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    """Browse ACTIVE job orders with optional title/description search and location filter."""
    page = max(1, page)
    limit = min(50, max(1, limit))
    jobs, total = job_order_repo.list_scoped(
        db,
        ctx,
        status=JobOrderStatus.ACTIVE.value,
        search=search,
        location=location,
        limit=limit,
        offset=(page - 1) * limit,
    )
    page_out = Page[JobListingOut](items=[job_listing_view(j) for j in jobs], total=total, page=page, limit=limit)
    return {"success": True, "data": _dump(page_out)}


@router.get("/recommended-jobs")
def recommended_jobs(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    jobs, _ = job_order_repo.list_scoped(db, ctx, status=JobOrderStatus.ACTIVE.value, limit=RECOMMENDED_LIMIT)
    return {"success": True, "data": [_dump(job_listing_view(j)) for j in jobs]}


@router.get("/jobs/{job_order_id}")
def get_job(
    job_order_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    job = job_order_repo.get_scoped(db, ctx, job_order_id)
    if not job:
        raise NotFoundError("Job not found")
    return {"success": True, "data": _dump(job_listing_view(job))}


@router.post("/jobs/{job_order_id}/apply", status_code=status.HTTP_201_CREATED)
def apply(
    job_order_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    application = apply_to_job(db, ctx, job_order_id)
    return {"success": True, "data": _dump(ApplicationOut.model_validate(application))}


@router.get("/profile-completion")
def get_profile_completion(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    return {"success": True, "data": profile_completion(_profile(db, ctx))}


@router.get("/match-score")
def get_match_score(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    return {"success": True, "data": match_score(_profile(db, ctx))}


@router.get("/reward-points")
def get_reward_points(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    return {"success": True, "data": _profile(db, ctx).reward_points or 0}


@router.get("/rewards/catalog")
def get_reward_catalog(ctx: AuthContext = Depends(get_applicant_context)):
    """Rewards an applicant can spend points on. Redemption is not offered yet."""
    return {"success": True, "data": [dict(item) for item in REWARD_CATALOG]}


@router.get("/cv")
def get_cv(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    return {"success": True, "data": _profile(db, ctx).ai_generated_cv or None}


@router.put("/cv")
def save_cv(
    document: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    """Replace the CV document wholesale; its shape is up to the client."""
    profile = profile_repo.replace_cv(db, _profile(db, ctx), document)
    return {"success": True, "data": profile.ai_generated_cv}


@router.post("/cv/generate")
def generate_ai_cv(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_applicant_context)):
    profile = _profile(db, ctx)
    profile = profile_repo.replace_cv(db, profile, generate_cv(profile))
    return {"success": True, "data": profile.ai_generated_cv}


@router.get("/complaints")
def list_complaints(
    status: str | None = None,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    complaints = complaint_repo.list_for_applicant(db, ctx.profile_id, status=status.upper() if status else None)
    return {"success": True, "data": [_dump(ComplaintOut.model_validate(c)) for c in complaints]}


@router.post("/complaints", status_code=status.HTTP_201_CREATED)
def create_complaint(
    body: ComplaintCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_applicant_context),
):
    description = body.description or body.subject or "No description"
    complaint = complaint_repo.create(db, ctx.profile_id, body.category, description)
    logger.info("Complaint %s filed by applicant %s (%s)", complaint.id, ctx.profile_id, complaint.category)
    return {"success": True, "data": _dump(ComplaintOut.model_validate(complaint))}
