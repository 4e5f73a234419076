"""Platform-wide counts for the admin dashboard."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.application import Application
from app.models.complaint import Complaint
from app.models.employer import Employer
from app.models.enums import ApplicationStatus, ComplaintStatus, UserRole
from app.models.job_order import JobOrder
from app.models.user import User


def _grouped(db: Session, column, id_column) -> dict[str, int]:
    return {key: count for key, count in db.query(column, func.count(id_column)).group_by(column).all()}


def get_stats(db: Session) -> dict:
    """Return admin dashboard stats."""
    users_by_role = _grouped(db, User.role, User.id)
    job_orders_by_status = _grouped(db, JobOrder.status, JobOrder.id)
    applications_by_status = _grouped(db, Application.status, Application.id)
    complaints_by_status = _grouped(db, Complaint.status, Complaint.id)
    pending_verifications = (
        db.query(func.count(Employer.id)).filter(Employer.is_verified == False).scalar() or 0  # noqa: E712
    )
    open_complaints = sum(
        n for s, n in complaints_by_status.items()
        if s not in (ComplaintStatus.RESOLVED.value, ComplaintStatus.CLOSED.value)
    )
    return {
        "applicantCount": users_by_role.get(UserRole.APPLICANT.value, 0),
        "employerCount": users_by_role.get(UserRole.EMPLOYER.value, 0),
        "jobOrderCount": sum(job_orders_by_status.values()),
        "jobOrdersByStatus": job_orders_by_status,
        "applicationCount": sum(applications_by_status.values()),
        "applicationsByStatus": applications_by_status,
        "deploymentCount": applications_by_status.get(ApplicationStatus.DEPLOYED.value, 0),
        "pendingVerifications": pending_verifications,
        "openComplaints": open_complaints,
    }
