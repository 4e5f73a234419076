from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base, JSONDocument


class Employer(Base):
    __tablename__ = "employers"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name = Column(String, nullable=False)
    contact_person = Column(String)
    phone = Column(String)
    country = Column(String)
    is_verified = Column(Boolean, default=False, nullable=False)
    trust_score = Column(Integer, default=50, nullable=False)
    total_hires = Column(Integer, default=0, nullable=False)
    verification_docs = Column(JSONDocument)  # [{id, name, status, uploadedAt}]
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="employer")
    job_orders = relationship("JobOrder", back_populates="employer", cascade="all, delete-orphan")
