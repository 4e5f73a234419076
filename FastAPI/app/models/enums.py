from enum import Enum


class UserRole(str, Enum):
    APPLICANT = "APPLICANT"
    EMPLOYER = "EMPLOYER"
    ADMIN = "ADMIN"


class ApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    SHORTLISTED = "SHORTLISTED"
    INTERVIEWED = "INTERVIEWED"
    SELECTED = "SELECTED"
    PROCESSING = "PROCESSING"
    DEPLOYED = "DEPLOYED"
    REJECTED = "REJECTED"


class JobOrderStatus(str, Enum):
    ACTIVE = "ACTIVE"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class ComplaintCategory(str, Enum):
    EMPLOYER_ISSUE = "EMPLOYER_ISSUE"
    AGENCY_ISSUE = "AGENCY_ISSUE"
    DEPLOYMENT_DELAY = "DEPLOYMENT_DELAY"
    ABUSE = "ABUSE"
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"
    OTHER = "OTHER"


class ComplaintStatus(str, Enum):
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    ESCALATED = "ESCALATED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"
