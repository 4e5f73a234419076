"""Application status machine.

APPLIED -> SHORTLISTED -> INTERVIEWED -> SELECTED -> PROCESSING -> DEPLOYED,
with REJECTED reachable from any non-terminal state. Milestone timestamps
(shortlisted/interviewed/selected/deployed) are latched: the first transition
into a status records the time and later transitions never overwrite it.

By default any of the seven statuses is accepted as a target from a
non-terminal state, matching what the dashboards do today (employers jump
straight to SELECTED or back a step). DEPLOYED and REJECTED are final in both
modes. ``settings.strict_status_transitions`` switches to forward-only sequencing.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.core.scoping import AuthContext
from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.repos.application_repo import get_scoped

logger = logging.getLogger(__name__)

PIPELINE = (
    ApplicationStatus.APPLIED,
    ApplicationStatus.SHORTLISTED,
    ApplicationStatus.INTERVIEWED,
    ApplicationStatus.SELECTED,
    ApplicationStatus.PROCESSING,
    ApplicationStatus.DEPLOYED,
)
TERMINAL = frozenset({ApplicationStatus.DEPLOYED, ApplicationStatus.REJECTED})
MILESTONE_FIELDS = {
    ApplicationStatus.SHORTLISTED: "shortlisted_at",
    ApplicationStatus.INTERVIEWED: "interviewed_at",
    ApplicationStatus.SELECTED: "selected_at",
    ApplicationStatus.DEPLOYED: "deployed_at",
}


def parse_status(value) -> ApplicationStatus:
    """Normalize a client-supplied status ("shortlisted", "SHORTLISTED") or fail."""
    if isinstance(value, ApplicationStatus):
        return value
    raw = str(value or "").strip().upper()
    try:
        return ApplicationStatus(raw)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"Invalid status '{value}'. Must be one of: {allowed}") from None


def is_transition_allowed(current, target, strict: bool = False) -> bool:
    current = parse_status(current)
    target = parse_status(target)
    if current == target:
        return True
    if current in TERMINAL:
        return False
    if not strict:
        return True
    if target == ApplicationStatus.REJECTED:
        return True
    return PIPELINE.index(target) == PIPELINE.index(current) + 1


def latch_milestone(application: Application, field: str, now: datetime) -> bool:
    """Set a milestone timestamp only if it is still unset. Returns True if written."""
    if getattr(application, field) is not None:
        return False
    setattr(application, field, now)
    return True


def apply_transition(
    application: Application,
    target,
    notes: str | None = None,
    *,
    strict: bool | None = None,
    now: datetime | None = None,
) -> Application:
    """Move ``application`` to ``target`` in memory. Caller commits."""
    target = parse_status(target)
    strict = settings.strict_status_transitions if strict is None else strict
    current = application.status or ApplicationStatus.APPLIED.value
    if not is_transition_allowed(current, target, strict=strict):
        raise ValidationError(f"Cannot move application from {current} to {target.value}")

    now = now or datetime.now(timezone.utc)
    application.status = target.value
    field = MILESTONE_FIELDS.get(target)
    if field:
        latch_milestone(application, field, now)
    if notes is not None:
        application.interview_notes = notes
    return application


def transition_application(
    db: Session,
    ctx: AuthContext,
    application_id: str,
    status,
    notes: str | None = None,
) -> Application:
    """Employer-driven status change on an application against one of their job orders."""
    target = parse_status(status)
    if not ctx.is_employer:
        raise ForbiddenError("Only the hiring employer can change an application's status")
    application = get_scoped(db, ctx, application_id, for_update=True)
    if not application:
        raise NotFoundError("Application not found")
    previous = application.status
    apply_transition(application, target, notes)
    db.commit()
    db.refresh(application)
    logger.info(
        "Application %s moved %s -> %s by employer %s",
        application.id, previous, application.status, ctx.employer_id,
    )
    return application


def record_interview_feedback(
    db: Session,
    ctx: AuthContext,
    application_id: str,
    notes: str | None = None,
) -> Application:
    """Store interview notes and latch interviewed_at without changing status."""
    application = get_scoped(db, ctx, application_id, for_update=True)
    if not application:
        raise NotFoundError("Interview not found")
    if notes:
        application.interview_notes = notes
    latch_milestone(application, "interviewed_at", datetime.now(timezone.utc))
    db.commit()
    db.refresh(application)
    return application
