from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PersistenceError
from app.models.assignment import Assignment
from app.models.late_policy import LatePolicy
from app.models.participant import Participant


class AssignmentStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, assignment_id: int) -> Assignment:
        assignment = self.db.query(Assignment).filter(Assignment.id == assignment_id).first()
        if not assignment:
            raise NotFoundError("Assignment", assignment_id)
        return assignment

    def claim_penalty_calculation(self, assignment_id: int) -> bool:
        """
        Compare-and-set the calculated flag from false to true.

        Returns True only for the caller whose UPDATE matched the row, so
        concurrent passes cannot both see the assignment as uncalculated.
        """
        try:
            updated = (
                self.db.query(Assignment)
                .filter(
                    Assignment.id == assignment_id,
                    Assignment.is_penalty_calculated == False,  # noqa: E712
                )
                .update({Assignment.is_penalty_calculated: True}, synchronize_session="evaluate")
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not mark assignment {assignment_id} as calculated: {exc}") from exc
        return updated == 1


class LatePolicyStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, policy_id: int) -> LatePolicy:
        policy = self.db.query(LatePolicy).filter(LatePolicy.id == policy_id).first()
        if not policy:
            raise NotFoundError("LatePolicy", policy_id)
        return policy


class ParticipantStore:
    def __init__(self, db: Session):
        self.db = db

    def find_all_by_assignment(self, assignment_id: int) -> list[Participant]:
        return self.db.query(Participant).filter(Participant.parent_id == assignment_id).all()

    def find_for_user(self, assignment_id: int, user_id: int) -> Participant:
        participant = (
            self.db.query(Participant)
            .filter(Participant.parent_id == assignment_id, Participant.user_id == user_id)
            .first()
        )
        if not participant:
            raise NotFoundError("Participant", f"for user {user_id} in assignment {assignment_id}")
        return participant

    def update_penalties(self, participant: Participant, components, total: int) -> None:
        # all four columns go out in one UPDATE
        participant.submission_penalty = components.submission
        participant.review_penalty = components.review
        participant.meta_review_penalty = components.meta_review
        participant.total_penalty = total
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"could not store penalties for participant {participant.id}: {exc}",
                participant_id=participant.id,
            ) from exc
