import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.core.scoping import AuthContext
from app.models.application import Application
from app.models.enums import JobOrderStatus
from app.models.job_order import JobOrder
from app.repos.application_repo import DuplicateApplication, create, get_existing

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "Already applied to this job"


def apply_to_job(db: Session, ctx: AuthContext, job_order_id: str) -> Application:
    """
    Create an APPLIED application for the caller's own profile.

    The job order must exist and be ACTIVE. There is no capacity gate: a job
    order keeps accepting applications after its positions are nominally filled.
    """
    if not ctx.is_applicant or not ctx.profile_id:
        raise ForbiddenError("Only applicants can apply to jobs")
    job_order = (
        db.query(JobOrder)
        .filter(JobOrder.id == job_order_id, JobOrder.status == JobOrderStatus.ACTIVE.value)
        .first()
    )
    if not job_order:
        raise NotFoundError("Job not found")
    if get_existing(db, ctx.profile_id, job_order.id):
        raise ConflictError(ALREADY_APPLIED)
    try:
        application = create(db, ctx.profile_id, job_order.id)
    except DuplicateApplication:
        raise ConflictError(ALREADY_APPLIED) from None
    logger.info("Applicant %s applied to job order %s (application %s)", ctx.profile_id, job_order.id, application.id)
    return application
