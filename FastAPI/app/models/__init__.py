from app.models.user import User
from app.models.profile import Profile
from app.models.employer import Employer
from app.models.job_order import JobOrder
from app.models.application import Application
from app.models.complaint import Complaint

__all__ = [
    "User",
    "Profile",
    "Employer",
    "JobOrder",
    "Application",
    "Complaint",
]
