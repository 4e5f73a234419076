from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.complaint import Complaint
from app.models.enums import ComplaintCategory, ComplaintStatus


def normalize_category(raw: str | None) -> str:
    """Map free-text categories ("Deployment delay", "abuse") to the enum; unknown -> OTHER."""
    key = "_".join((raw or "other").strip().upper().split())
    try:
        return ComplaintCategory(key).value
    except ValueError:
        return ComplaintCategory.OTHER.value


def create(db: Session, applicant_id: str, category: str | None, description: str) -> Complaint:
    complaint = Complaint(
        id=generate_id(),
        applicant_id=applicant_id,
        category=normalize_category(category),
        description=description,
        status=ComplaintStatus.SUBMITTED.value,
        escalation_level=1,
    )
    db.add(complaint)
    db.commit()
    db.refresh(complaint)
    return complaint


def list_for_applicant(db: Session, applicant_id: str, status: str | None = None) -> list[Complaint]:
    q = db.query(Complaint).filter(Complaint.applicant_id == applicant_id)
    if status:
        q = q.filter(Complaint.status == status)
    return q.order_by(Complaint.created_at.desc(), Complaint.id).all()


def get_all_paginated(
    db: Session,
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Complaint], int]:
    q = db.query(Complaint).order_by(Complaint.created_at.desc(), Complaint.id)
    if status:
        q = q.filter(Complaint.status == status)
    total = q.count()
    return q.offset(offset).limit(limit).all(), total
