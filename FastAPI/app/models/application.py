from sqlalchemy import Column, String, Float, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Application(Base):
    """An applicant's application to a job order; moves through the hiring pipeline."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("applicant_id", "job_order_id", name="uq_applications_applicant_job_order"),)

    id = Column(String, primary_key=True, index=True)
    applicant_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    job_order_id = Column(String, ForeignKey("job_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String, default="APPLIED", nullable=False, index=True)
    ai_match_score = Column(Float, nullable=True)
    shortlisted_at = Column(DateTime(timezone=True))
    interviewed_at = Column(DateTime(timezone=True))
    selected_at = Column(DateTime(timezone=True))
    deployed_at = Column(DateTime(timezone=True))
    interview_notes = Column(Text)
    video_interview_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    applicant = relationship("Profile", back_populates="applications")
    job_order = relationship("JobOrder", back_populates="applications")
