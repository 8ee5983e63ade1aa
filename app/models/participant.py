from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)

    parent_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    handle = Column(String(255), nullable=True)

    # last activity times, compared against the assignment deadlines
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    meta_reviewed_at = Column(DateTime(timezone=True), nullable=True)

    # Penalty fields (written together by the penalty engine)
    submission_penalty = Column(Integer, nullable=False, default=0)
    review_penalty = Column(Integer, nullable=False, default=0)
    meta_review_penalty = Column(Integer, nullable=False, default=0)
    total_penalty = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("parent_id", "user_id", name="uq_participant_assignment_user"),
    )

    assignment = relationship("Assignment", back_populates="participants")
    user = relationship("User", back_populates="participations")
    calculated_penalties = relationship(
        "CalculatedPenalty", back_populates="participant", cascade="all, delete-orphan"
    )
