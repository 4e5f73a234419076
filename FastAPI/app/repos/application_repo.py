import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.scoping import AuthContext, scope_applications
from app.core.security import generate_id
from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.models.job_order import JobOrder

logger = logging.getLogger(__name__)


class DuplicateApplication(Exception):
    """The (applicant, job order) pair already has an application."""


def get_existing(db: Session, applicant_id: str, job_order_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(
            Application.applicant_id == applicant_id,
            Application.job_order_id == job_order_id,
        )
        .first()
    )


def create(db: Session, applicant_id: str, job_order_id: str) -> Application:
    """
    Insert an APPLIED application. The unique constraint on
    (applicant_id, job_order_id) is the final arbiter: a concurrent insert that
    loses the race raises DuplicateApplication after rollback.
    """
    application = Application(
        id=generate_id(),
        applicant_id=applicant_id,
        job_order_id=job_order_id,
        status=ApplicationStatus.APPLIED.value,
        ai_match_score=None,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Duplicate application rejected by constraint: applicant=%s job_order=%s", applicant_id, job_order_id)
        raise DuplicateApplication(job_order_id) from e
    db.refresh(application)
    return application


def get_scoped(
    db: Session,
    ctx: AuthContext,
    application_id: str,
    *,
    for_update: bool = False,
) -> Application | None:
    q = db.query(Application).options(
        joinedload(Application.job_order).joinedload(JobOrder.employer),
        joinedload(Application.applicant),
    )
    q = scope_applications(q, ctx).filter(Application.id == application_id)
    if for_update:
        q = q.with_for_update(of=Application)
    return q.first()


def list_scoped(
    db: Session,
    ctx: AuthContext,
    *,
    status: str | None = None,
    statuses: tuple[str, ...] | None = None,
    job_order_id: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Application]:
    q = scope_applications(db.query(Application), ctx).options(
        joinedload(Application.job_order).joinedload(JobOrder.employer),
        joinedload(Application.applicant),
    )
    if status:
        q = q.filter(Application.status == status)
    if statuses:
        q = q.filter(Application.status.in_(statuses))
    if job_order_id:
        q = q.filter(Application.job_order_id == job_order_id)
    q = q.order_by(Application.created_at.desc(), Application.id)
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def count_scoped(
    db: Session,
    ctx: AuthContext,
    *,
    status: str | None = None,
    statuses: tuple[str, ...] | None = None,
) -> int:
    q = scope_applications(db.query(func.count(Application.id)), ctx)
    if status:
        q = q.filter(Application.status == status)
    if statuses:
        q = q.filter(Application.status.in_(statuses))
    return q.scalar() or 0


def status_counts_scoped(db: Session, ctx: AuthContext) -> dict[str, int]:
    rows = (
        scope_applications(db.query(Application.status, func.count(Application.id)), ctx)
        .group_by(Application.status)
        .all()
    )
    return {status: count for status, count in rows}
