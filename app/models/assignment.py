from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func, false
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    instructor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # no FK constraint enforcement on delete: a dangling id surfaces as NotFoundError
    late_policy_id = Column(Integer, ForeignKey("late_policies.id"), nullable=True, index=True)

    submission_due_at = Column(DateTime(timezone=True), nullable=True)
    review_due_at = Column(DateTime(timezone=True), nullable=True)
    meta_review_due_at = Column(DateTime(timezone=True), nullable=True)

    # flips false -> true once, never back
    is_penalty_calculated = Column(Boolean, nullable=False, default=False, server_default=false())

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    late_policy = relationship("LatePolicy", back_populates="assignments")

    participants = relationship("Participant", back_populates="assignment", cascade="all, delete-orphan")
