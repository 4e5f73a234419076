from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base, JSONDocument


class Profile(Base):
    """Applicant profile, created together with its APPLICANT user."""

    __tablename__ = "profiles"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    first_name = Column(String)
    last_name = Column(String)
    phone = Column(String)
    nationality = Column(String)
    date_of_birth = Column(Date)
    trust_score = Column(Integer, default=50, nullable=False)
    reward_points = Column(Integer, default=0, nullable=False)
    ai_generated_cv = Column(JSONDocument)  # summary, skills, experience, education, certifications
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="profile")
    applications = relationship("Application", back_populates="applicant")
    complaints = relationship("Complaint", back_populates="applicant")
