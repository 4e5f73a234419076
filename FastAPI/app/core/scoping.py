"""Ownership scoping for every Application / JobOrder query.

The caller's identity is resolved once per request into an ``AuthContext``.
Queries are narrowed by the owner predicate *before* any existence check, so a
record the caller cannot see is indistinguishable from one that does not exist.
"""

from dataclasses import dataclass

from sqlalchemy import false
from sqlalchemy.orm import Query

from app.models.application import Application
from app.models.enums import JobOrderStatus, UserRole
from app.models.job_order import JobOrder
from app.models.user import User


@dataclass(frozen=True)
class AuthContext:
    user: User
    role: str
    profile_id: str | None = None
    employer_id: str | None = None

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_applicant(self) -> bool:
        return self.role == UserRole.APPLICANT.value

    @property
    def is_employer(self) -> bool:
        return self.role == UserRole.EMPLOYER.value


def build_context(user: User) -> AuthContext:
    profile = getattr(user, "profile", None)
    employer = getattr(user, "employer", None)
    return AuthContext(
        user=user,
        role=user.role,
        profile_id=profile.id if profile is not None else None,
        employer_id=employer.id if employer is not None else None,
    )


def scope_applications(query: Query, ctx: AuthContext) -> Query:
    """Restrict an Application query to rows the caller owns (admins see everything)."""
    if ctx.is_admin:
        return query
    if ctx.is_applicant and ctx.profile_id:
        return query.filter(Application.applicant_id == ctx.profile_id)
    if ctx.is_employer and ctx.employer_id:
        return query.filter(Application.job_order.has(JobOrder.employer_id == ctx.employer_id))
    return query.filter(false())


def scope_job_orders(query: Query, ctx: AuthContext) -> Query:
    """Employers see their own job orders, applicants only ACTIVE ones, admins all."""
    if ctx.is_admin:
        return query
    if ctx.is_employer and ctx.employer_id:
        return query.filter(JobOrder.employer_id == ctx.employer_id)
    if ctx.is_applicant:
        return query.filter(JobOrder.status == JobOrderStatus.ACTIVE.value)
    return query.filter(false())
