from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from app.models.user import User
from app.models.profile import Profile
from app.models.employer import Employer
from app.models.enums import UserRole
from app.core.security import hash_password, generate_id


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return (
        db.query(User)
        .options(joinedload(User.profile), joinedload(User.employer))
        .filter(User.id == user_id)
        .first()
    )


def create(
    db: Session,
    *,
    email: str,
    password: str,
    role: str,
    first_name: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
    otp: str | None = None,
    otp_expires_at: datetime | None = None,
    is_email_verified: bool = False,
) -> User:
    """
    Create a user together with its owned record in one commit: a Profile for
    applicants, an Employer for employers (first/last name become company name
    and contact person), nothing for admins.
    """
    user = User(
        id=generate_id(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role,
        is_active=True,
        is_email_verified=is_email_verified,
        email_verification_otp=otp,
        email_verification_expiry=otp_expires_at,
    )
    if role == UserRole.APPLICANT.value:
        user.profile = Profile(
            id=generate_id(),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            nationality="PH",
            trust_score=50,
            reward_points=0,
        )
    elif role == UserRole.EMPLOYER.value:
        user.employer = Employer(
            id=generate_id(),
            company_name=first_name or "",
            contact_person=last_name,
            phone=phone,
            country="PH",
            is_verified=False,
            trust_score=50,
            total_hires=0,
            verification_docs=[],
        )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    password_hash: str | None = None,
    is_active: bool | None = None,
    is_email_verified: bool | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if password_hash is not None:
        user.password_hash = password_hash
    if is_active is not None:
        user.is_active = is_active
    if is_email_verified is not None:
        user.is_email_verified = is_email_verified
    db.commit()
    db.refresh(user)
    return user


def set_verification_otp(db: Session, user: User, otp: str, expires_at: datetime) -> User:
    user.email_verification_otp = otp
    user.email_verification_expiry = expires_at
    db.commit()
    db.refresh(user)
    return user


def mark_email_verified(db: Session, user: User) -> User:
    user.is_email_verified = True
    user.email_verification_otp = None
    user.email_verification_expiry = None
    db.commit()
    db.refresh(user)
    return user


def get_all_users_paginated(
    db: Session,
    search: str | None = None,
    role: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[User], int]:
    """List users with optional email search / role filter. Returns (items, total)."""
    q = db.query(User).order_by(User.created_at.desc(), User.id)
    if role:
        q = q.filter(User.role == role)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(User.email.ilike(term))
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total
