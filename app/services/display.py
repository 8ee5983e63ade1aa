import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.calculated_penalty import CalculatedPenalty

logger = logging.getLogger(__name__)


class CalculatedPenaltySink:
    """Records first-pass penalty totals for reporting pages."""

    def __init__(self, db: Session):
        self.db = db

    def record(self, participant_id: int, total: int) -> None:
        # savepoint: a failed insert must not poison the surrounding pass
        try:
            with self.db.begin_nested():
                self.db.add(CalculatedPenalty(participant_id=participant_id, penalty_points=total))
        except SQLAlchemyError:
            logger.exception("could not record penalty %s for participant %s", total, participant_id)
