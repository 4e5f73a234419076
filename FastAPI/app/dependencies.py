import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from app.core.scoping import AuthContext, build_context
from app.core.security import decode_access_token
from app.models.enums import UserRole
from app.models.user import User
from app.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise UnauthorizedError("Unauthorized - No token provided")
    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        logger.info("Auth failed: invalid or expired token")
        raise UnauthorizedError("Invalid or expired token")
    user = get_by_id(db, user_id)
    if not user or not user.is_active:
        logger.info("Auth failed: user from token not found or inactive")
        raise UnauthorizedError("Unauthorized - User not found or inactive")
    return user


def get_auth_context(user=Depends(get_current_user)) -> AuthContext:
    """Resolve the per-request caller context (role + owned profile/employer id)."""
    ctx = build_context(user)
    if ctx.is_applicant and not ctx.profile_id:
        raise NotFoundError("Applicant profile not found")
    if ctx.is_employer and not ctx.employer_id:
        raise NotFoundError("Employer profile not found")
    return ctx


def _require_role(ctx: AuthContext, role: UserRole) -> AuthContext:
    if ctx.role != role.value:
        raise ForbiddenError(f"Role {ctx.role} is not authorized to access this resource")
    return ctx


def get_applicant_context(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
    return _require_role(ctx, UserRole.APPLICANT)


def get_employer_context(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
    return _require_role(ctx, UserRole.EMPLOYER)


def get_admin_context(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
    return _require_role(ctx, UserRole.ADMIN)
