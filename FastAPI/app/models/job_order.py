from sqlalchemy import CheckConstraint, Column, String, Integer, Float, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base, JSONDocument


class JobOrder(Base):
    __tablename__ = "job_orders"
    __table_args__ = (CheckConstraint("positions >= 1", name="ck_job_orders_positions_positive"),)

    id = Column(String, primary_key=True, index=True)
    employer_id = Column(String, ForeignKey("employers.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSONDocument)  # skills, responsibilities, benefits
    salary = Column(Float, nullable=True)
    location = Column(String, nullable=False)
    positions = Column(Integer, default=1, nullable=False)
    status = Column(String, default="ACTIVE", nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employer = relationship("Employer", back_populates="job_orders")
    applications = relationship(
        "Application",
        back_populates="job_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
