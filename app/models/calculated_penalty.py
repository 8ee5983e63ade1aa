from sqlalchemy import Column, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class CalculatedPenalty(Base):
    """Reporting row recorded the first time an assignment's penalties are calculated."""

    __tablename__ = "calculated_penalties"

    id = Column(Integer, primary_key=True, index=True)
    participant_id = Column(Integer, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False, index=True)
    penalty_points = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    participant = relationship("Participant", back_populates="calculated_penalties")
