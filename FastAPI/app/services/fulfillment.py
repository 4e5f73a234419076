"""Read-time accounting over a job order's applications.

Nothing here is cached or stored: every call recomputes from the current
Application rows. The fill percentage is not clamped: an
over-hired job order (more SELECTED/DEPLOYED than positions) reports > 100.
"""

from dataclasses import dataclass, field
from typing import Mapping

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.models.job_order import JobOrder

FILLED_STATUSES = (ApplicationStatus.SELECTED.value, ApplicationStatus.DEPLOYED.value)
INTERVIEW_STATUSES = (ApplicationStatus.SHORTLISTED.value, ApplicationStatus.INTERVIEWED.value)


@dataclass
class Fulfillment:
    positions: int
    applicant_count: int = 0
    status_counts: dict[str, int] = field(default_factory=dict)

    @property
    def selected_count(self) -> int:
        return sum(self.status_counts.get(s, 0) for s in FILLED_STATUSES)

    @property
    def fill_percentage(self) -> float:
        if not self.positions:
            return 0.0
        return self.selected_count / self.positions * 100

    @property
    def open_positions(self) -> int:
        return max(0, self.positions - self.selected_count)

    def pipeline(self) -> dict[str, int]:
        return candidate_pipeline(self.status_counts)

    def as_dict(self) -> dict:
        return {
            "positions": self.positions,
            "applicantCount": self.applicant_count,
            "selectedCount": self.selected_count,
            "openPositions": self.open_positions,
            "fillPercentage": self.fill_percentage,
            "statusCounts": dict(self.status_counts),
            "pipeline": self.pipeline(),
        }


def summarize(status_counts: Mapping[str, int], positions: int) -> Fulfillment:
    """Build a Fulfillment from the per-status counts of one job order's applications."""
    return Fulfillment(
        positions=positions,
        applicant_count=sum(status_counts.values()),
        status_counts=dict(status_counts),
    )


def candidate_pipeline(status_counts: dict[str, int]) -> dict[str, int]:
    """Lower-case status -> count for every pipeline status, zero-filled."""
    return {s.value.lower(): status_counts.get(s.value, 0) for s in ApplicationStatus}


def status_counts_for_job_order(db: Session, job_order_id: str) -> dict[str, int]:
    rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.job_order_id == job_order_id)
        .group_by(Application.status)
        .all()
    )
    return {status: count for status, count in rows}


def job_order_fulfillment(db: Session, job_order: JobOrder) -> Fulfillment:
    return summarize(status_counts_for_job_order(db, job_order.id), job_order.positions)
