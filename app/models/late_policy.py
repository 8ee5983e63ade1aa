from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class LatePolicy(Base):
    __tablename__ = "late_policies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    instructor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # points charged per started unit of lateness
    penalty_per_unit = Column(Integer, nullable=False, default=1)
    penalty_unit = Column(String(16), nullable=False, default="hour")  # minute | hour | day

    # ceiling for a participant's total penalty
    max_penalty = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    assignments = relationship("Assignment", back_populates="late_policy")
