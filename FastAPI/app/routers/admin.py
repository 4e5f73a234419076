import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.core.scoping import AuthContext
from app.database import get_db
from app.dependencies import get_admin_context
from app.repos import application_repo, complaint_repo, employer_repo, job_order_repo
from app.repos.admin_repo import get_stats
from app.repos.user_repo import get_all_users_paginated, update as update_user
from app.schemas.admin import EmployerVerificationUpdate, UserStatusUpdate
from app.schemas.applicant import ComplaintOut, applicant_application_view
from app.schemas.auth import EmployerOut, UserOut
from app.schemas.common import Page
from app.schemas.employer import JobOrderOut, applicant_name, job_order_detail_view
from app.services.fulfillment import job_order_fulfillment

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])

MAX_PAGE_SIZE = 100


def _paging(page: int, limit: int) -> tuple[int, int, int]:
    page = max(1, page)
    limit = min(max(1, limit), MAX_PAGE_SIZE)
    return page, limit, (page - 1) * limit


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


def _job_order_row(db: Session, job_order) -> dict:
    fulfillment = job_order_fulfillment(db, job_order)
    return {
        **_dump(JobOrderOut.model_validate(job_order)),
        "employer": job_order.employer.company_name if job_order.employer else None,
        "fulfillment": fulfillment.as_dict(),
    }


def _application_row(application) -> dict:
    return {**_dump(applicant_application_view(application)), "applicantName": applicant_name(application.applicant)}


@router.get("/stats")
def get_admin_stats(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_admin_context)):
    """Platform-wide counts for the admin dashboard."""
    return {"success": True, "data": get_stats(db)}


@router.get("/users")
def list_users(
    search: str | None = None,
    role: str | None = None,
    page: int = 1,
    limit: int = 20,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    """List users with optional email search and role filter, paginated."""
    page, limit, offset = _paging(page, limit)
    users, total = get_all_users_paginated(
        db, search=search, role=role.upper() if role else None, limit=limit, offset=offset
    )
    page_out = Page[UserOut](items=[UserOut.model_validate(u) for u in users], total=total, page=page, limit=limit)
    return {"success": True, "data": _dump(page_out)}


@router.patch("/users/{user_id}/status")
def set_user_status(
    user_id: str,
    body: UserStatusUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    """Activate or deactivate an account. Admins cannot deactivate themselves."""
    if user_id == ctx.user_id and not body.is_active:
        raise ValidationError("Cannot deactivate your own account")
    updated = update_user(db, user_id, is_active=body.is_active)
    if not updated:
        raise NotFoundError("User not found")
    logger.info("Admin %s set user %s active=%s", ctx.user.email, user_id, body.is_active)
    return {"success": True, "data": _dump(UserOut.model_validate(updated))}


@router.get("/employers")
def list_employers(
    is_verified: bool | None = None,
    page: int = 1,
    limit: int = 20,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    page, limit, offset = _paging(page, limit)
    employers, total = employer_repo.get_all_paginated(db, is_verified=is_verified, limit=limit, offset=offset)
    page_out = Page[EmployerOut](
        items=[EmployerOut.model_validate(e) for e in employers], total=total, page=page, limit=limit
    )
    return {"success": True, "data": _dump(page_out)}


@router.patch("/employers/{employer_id}/verification")
def set_employer_verification(
    employer_id: str,
    body: EmployerVerificationUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    """Verify (approving pending documents) or unverify an employer."""
    employer = employer_repo.get_by_id(db, employer_id)
    if not employer:
        raise NotFoundError("Employer not found")
    employer = employer_repo.set_verified(db, employer, body.is_verified)
    logger.info("Admin %s set employer %s verified=%s", ctx.user.email, employer.id, body.is_verified)
    return {"success": True, "data": _dump(EmployerOut.model_validate(employer))}


@router.get("/job-orders")
def list_job_orders(
    status: str | None = None,
    page: int = 1,
    limit: int = 20,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    page, limit, offset = _paging(page, limit)
    job_orders, total = job_order_repo.list_scoped(
        db, ctx, status=status.upper() if status else None, limit=limit, offset=offset
    )
    return {
        "success": True,
        "data": {
            "items": [_job_order_row(db, j) for j in job_orders],
            "total": total,
            "page": page,
            "limit": limit,
        },
    }


@router.get("/job-orders/{job_order_id}")
def get_job_order(
    job_order_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    job_order = job_order_repo.get_scoped(db, ctx, job_order_id)
    if not job_order:
        raise NotFoundError("Job order not found")
    applications = application_repo.list_scoped(db, ctx, job_order_id=job_order.id)
    detail = job_order_detail_view(job_order, applications, job_order_fulfillment(db, job_order))
    return {"success": True, "data": _dump(detail)}


@router.get("/applications")
def list_applications(
    status: str | None = None,
    page: int = 1,
    limit: int = 20,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    page, limit, offset = _paging(page, limit)
    status = status.upper() if status else None
    applications = application_repo.list_scoped(db, ctx, status=status, limit=limit, offset=offset)
    total = application_repo.count_scoped(db, ctx, status=status)
    return {
        "success": True,
        "data": {
            "items": [_application_row(a) for a in applications],
            "total": total,
            "page": page,
            "limit": limit,
        },
    }


@router.get("/applications/{application_id}")
def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    application = application_repo.get_scoped(db, ctx, application_id)
    if not application:
        raise NotFoundError("Application not found")
    return {"success": True, "data": _application_row(application)}


@router.get("/complaints")
def list_complaints(
    status: str | None = None,
    page: int = 1,
    limit: int = 20,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_admin_context),
):
    page, limit, offset = _paging(page, limit)
    complaints, total = complaint_repo.get_all_paginated(
        db, status=status.upper() if status else None, limit=limit, offset=offset
    )
    page_out = Page[ComplaintOut](
        items=[ComplaintOut.model_validate(c) for c in complaints], total=total, page=page, limit=limit
    )
    return {"success": True, "data": _dump(page_out)}
