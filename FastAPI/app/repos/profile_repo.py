from typing import Any

from sqlalchemy.orm import Session

from app.models.profile import Profile

UPDATABLE_FIELDS = ("first_name", "last_name", "phone", "nationality", "date_of_birth")


def get_by_id(db: Session, profile_id: str) -> Profile | None:
    return db.query(Profile).filter(Profile.id == profile_id).first()


def update(
    db: Session,
    profile: Profile,
    fields: dict[str, Any],
    cv_updates: dict[str, Any] | None = None,
) -> Profile:
    """
    Apply a partial update. Only keys present in ``fields`` are written (None
    clears the column); ``cv_updates`` is merged key-by-key into the CV document.
    """
    for name, value in fields.items():
        if name in UPDATABLE_FIELDS:
            setattr(profile, name, value)
    if cv_updates:
        existing = profile.ai_generated_cv if isinstance(profile.ai_generated_cv, dict) else {}
        profile.ai_generated_cv = {**existing, **cv_updates}
    db.commit()
    db.refresh(profile)
    return profile


def replace_cv(db: Session, profile: Profile, document: dict[str, Any] | None) -> Profile:
    profile.ai_generated_cv = document
    db.commit()
    db.refresh(profile)
    return profile
