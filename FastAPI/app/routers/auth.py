import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from app.core.security import (
    create_access_token,
    generate_otp,
    hash_password,
    is_expired,
    otp_expiry,
    verify_password,
)
from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.repos.user_repo import (
    create as create_user,
    get_by_email,
    mark_email_verified,
    set_verification_otp,
    update as update_user,
)
from app.schemas.auth import (
    ResendOtpRequest,
    SessionOut,
    SignInRequest,
    SignUpRequest,
    UserOut,
    VerificationPending,
    VerifyEmailRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_code(db: Session, user: User) -> str:
    """Store a fresh OTP on the user. Email delivery is out of scope; the code is logged in development."""
    otp = generate_otp()
    set_verification_otp(db, user, otp, otp_expiry())
    if settings.is_development:
        logger.info("[DEV] Verification code for %s: %s", user.email, otp)
    return otp


def _pending(email: str, otp: str) -> dict:
    return VerificationPending(
        email=email,
        dev_otp=otp if settings.is_development else None,
    ).model_dump(by_alias=True, exclude_none=True)


def _session(user: User) -> dict:
    token = create_access_token(user.id)
    return SessionOut(token=token, user=UserOut.model_validate(user)).model_dump(by_alias=True, mode="json")


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    existing = get_by_email(db, data.email)
    if existing:
        if existing.is_email_verified:
            raise ConflictError("User already exists with this email")
        # Unverified accounts may sign up again: new password, new code
        update_user(db, existing.id, password_hash=hash_password(data.password))
        otp = _issue_code(db, existing)
        logger.info("Re-sent verification for unverified account: %s", existing.email)
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "success": True,
                "message": "A new verification code has been sent to your email.",
                "data": _pending(existing.email, otp),
            },
        )

    otp = generate_otp()
    user = create_user(
        db,
        email=data.email,
        password=data.password,
        role=data.role,
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        otp=otp,
        otp_expires_at=otp_expiry(),
    )
    logger.info("User registered: %s (%s)", user.email, user.role)
    if settings.is_development:
        logger.info("[DEV] Verification code for %s: %s", user.email, otp)
    return {
        "success": True,
        "message": "Registration successful. Please check your email for the verification code.",
        "data": _pending(user.email, otp),
    }


@router.post("/verify-email")
def verify_email(data: VerifyEmailRequest, db: Session = Depends(get_db)):
    user = get_by_email(db, data.email)
    if not user:
        raise NotFoundError("User not found")
    if user.is_email_verified:
        raise ValidationError("Email is already verified")
    if is_expired(user.email_verification_expiry):
        raise ValidationError("Verification code has expired. Please request a new one.")
    if user.email_verification_otp != data.otp:
        raise ValidationError("Invalid verification code. Please try again.")
    user = mark_email_verified(db, user)
    logger.info("Email verified: %s", user.email)
    return {"success": True, "message": "Email verified successfully!", "data": _session(user)}


@router.post("/resend-otp")
def resend_otp(data: ResendOtpRequest, db: Session = Depends(get_db)):
    user = get_by_email(db, data.email)
    if not user:
        raise NotFoundError("User not found")
    if user.is_email_verified:
        raise ValidationError("Email is already verified")
    otp = _issue_code(db, user)
    return {
        "success": True,
        "message": "A new verification code has been sent to your email.",
        "data": _pending(user.email, otp),
    }


@router.post("/sign-in")
def sign_in(data: SignInRequest, db: Session = Depends(get_db)):
    user = get_by_email(db, data.email)
    if not user:
        raise UnauthorizedError("Invalid email or password")
    if not user.is_active:
        raise ForbiddenError("Account is inactive. Please contact support.")
    if not verify_password(data.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    if not user.is_email_verified:
        otp = _issue_code(db, user)
        return {
            "success": True,
            "message": "Please verify your email first. A new verification code has been sent.",
            "data": _pending(user.email, otp),
        }
    logger.info("User signed in: %s", user.email)
    return {"success": True, "message": "Login successful", "data": _session(user)}


@router.post("/sign-out")
def sign_out(user: User = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy.
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return {"success": True, "data": UserOut.model_validate(user).model_dump(by_alias=True, mode="json")}


@router.post("/refresh")
def refresh_token(user: User = Depends(get_current_user)):
    return {
        "success": True,
        "message": "Token refreshed successfully",
        "data": {"token": create_access_token(user.id)},
    }
