from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.models.employer import Employer

UPDATABLE_FIELDS = ("company_name", "contact_person", "phone", "country")


def get_by_id(db: Session, employer_id: str) -> Employer | None:
    return db.query(Employer).filter(Employer.id == employer_id).first()


def update(db: Session, employer: Employer, fields: dict[str, Any]) -> Employer:
    for name, value in fields.items():
        if name in UPDATABLE_FIELDS:
            setattr(employer, name, value)
    db.commit()
    db.refresh(employer)
    return employer


def documents(employer: Employer) -> list[dict]:
    docs = employer.verification_docs
    if isinstance(docs, list):
        return docs
    return [docs] if docs else []


def add_document(db: Session, employer: Employer, name: str) -> dict:
    """Append a pending verification document entry (metadata only)."""
    now = datetime.now(timezone.utc)
    doc = {
        "id": f"DOC-{int(now.timestamp() * 1000)}",
        "name": name,
        "status": "pending",
        "uploadedAt": now.date().isoformat(),
    }
    # Reassign so SQLAlchemy sees the JSON column change
    employer.verification_docs = [*documents(employer), doc]
    db.commit()
    db.refresh(employer)
    return doc


def set_verified(db: Session, employer: Employer, is_verified: bool) -> Employer:
    employer.is_verified = is_verified
    if is_verified:
        employer.verification_docs = [
            {**d, "status": "approved"} if d.get("status") == "pending" else d
            for d in documents(employer)
        ]
    db.commit()
    db.refresh(employer)
    return employer


def get_all_paginated(
    db: Session,
    is_verified: bool | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Employer], int]:
    q = db.query(Employer).order_by(Employer.created_at.desc(), Employer.id)
    if is_verified is not None:
        q = q.filter(Employer.is_verified == is_verified)
    total = q.count()
    return q.offset(offset).limit(limit).all(), total
