from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.core.scoping import AuthContext, scope_job_orders
from app.core.security import generate_id
from app.models.enums import JobOrderStatus
from app.models.job_order import JobOrder

UPDATABLE_FIELDS = ("title", "description", "requirements", "salary", "location", "positions", "status")


def create(
    db: Session,
    employer_id: str,
    *,
    title: str,
    description: str,
    location: str,
    requirements: dict[str, Any] | None = None,
    salary: float | None = None,
    positions: int = 1,
    status: str = JobOrderStatus.ACTIVE.value,
) -> JobOrder:
    job_order = JobOrder(
        id=generate_id(),
        employer_id=employer_id,
        title=title,
        description=description,
        requirements=requirements,
        salary=salary,
        location=location,
        positions=positions,
        status=status,
    )
    db.add(job_order)
    db.commit()
    db.refresh(job_order)
    return job_order


def get_scoped(db: Session, ctx: AuthContext, job_order_id: str) -> JobOrder | None:
    q = db.query(JobOrder).options(joinedload(JobOrder.employer))
    return scope_job_orders(q, ctx).filter(JobOrder.id == job_order_id).first()


def list_scoped(
    db: Session,
    ctx: AuthContext,
    *,
    status: str | None = None,
    search: str | None = None,
    location: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[JobOrder], int]:
    """Job orders visible to the caller, newest first. Returns (items, total)."""
    q = scope_job_orders(db.query(JobOrder).options(joinedload(JobOrder.employer)), ctx)
    if status:
        q = q.filter(JobOrder.status == status)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(or_(JobOrder.title.ilike(term), JobOrder.description.ilike(term)))
    if location and location.strip():
        q = q.filter(JobOrder.location.ilike(f"%{location.strip()}%"))
    total = q.count()
    q = q.order_by(JobOrder.created_at.desc(), JobOrder.id)
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return q.all(), total


def count_scoped(db: Session, ctx: AuthContext, *, status: str | None = None) -> int:
    q = scope_job_orders(db.query(func.count(JobOrder.id)), ctx)
    if status:
        q = q.filter(JobOrder.status == status)
    return q.scalar() or 0


def update(db: Session, job_order: JobOrder, fields: dict[str, Any]) -> JobOrder:
    """Write only the supplied fields; omitted fields are left untouched."""
    for name, value in fields.items():
        if name in UPDATABLE_FIELDS:
            setattr(job_order, name, value)
    db.commit()
    db.refresh(job_order)
    return job_order


def delete(db: Session, job_order: JobOrder) -> None:
    """Delete a job order; its applications go with it."""
    db.delete(job_order)
    db.commit()
