import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import PersistenceError
from app.models.assignment import Assignment
from app.models.participant import Participant
from app.schemas.penalty import ParticipantPenaltyRead, PenaltyReport
from app.services.display import CalculatedPenaltySink
from app.services.penalty_components import deadline_components
from app.services.stores import AssignmentStore, LatePolicyStore, ParticipantStore

logger = logging.getLogger(__name__)


def clamp_total(raw_total: int, max_penalty: int | None) -> int:
    """
    Floor at 0; cap at the policy maximum when there is one.
    `max_penalty=None` means the assignment has no ceiling.
    """
    total = max(raw_total, 0)
    if total > 0 and max_penalty is not None:
        total = min(total, max_penalty)
    return total


def penalty_row(participant: Participant) -> ParticipantPenaltyRead:
    return ParticipantPenaltyRead(
        participant_id=participant.id,
        user_id=participant.user_id,
        submission_penalty=participant.submission_penalty,
        review_penalty=participant.review_penalty,
        meta_review_penalty=participant.meta_review_penalty,
        total_penalty=participant.total_penalty,
    )


class PenaltyEngine:
    """
    Computes, clamps and stores late penalties for every participant of an
    assignment.

    Every call recomputes and rewrites all participants. The one-time side
    effects (display recording and flipping `is_penalty_calculated`) only run
    for the pass that wins the compare-and-set on the flag.

    A pass is a single transaction: on any error it is rolled back and the
    error is re-raised (abort-and-report), so the flag and participant rows
    are never committed half-done.
    """

    def __init__(self, db: Session, component_source=None, display_sink=None):
        self.db = db
        self.assignments = AssignmentStore(db)
        self.participants = ParticipantStore(db)
        self.policies = LatePolicyStore(db)
        self.component_source = component_source or deadline_components
        self.display_sink = display_sink or CalculatedPenaltySink(db)

    def compute_penalties(self, assignment_id: int) -> PenaltyReport:
        assignment = self.assignments.find_by_id(assignment_id)

        try:
            should_record = self.assignments.claim_penalty_calculation(assignment_id)
            participants = self.participants.find_all_by_assignment(assignment_id)

            max_penalty = None
            policy_loaded = False
            rows: list[ParticipantPenaltyRead] = []

            for participant in participants:
                components = self.component_source(assignment, participant, self.policies)
                raw_total = components.raw_total

                # only look the policy up once a positive total needs capping
                if raw_total > 0 and not policy_loaded:
                    max_penalty = self._max_penalty(assignment)
                    policy_loaded = True

                total = clamp_total(raw_total, max_penalty)

                if total > 0 and should_record:
                    self._record(participant, total)

                self.participants.update_penalties(participant, components, total)
                logger.debug(
                    "assignment %s participant %s: %s -> %s",
                    assignment_id,
                    participant.id,
                    tuple(components),
                    total,
                )
                rows.append(penalty_row(participant))

            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"penalty pass for assignment {assignment_id} failed: {exc}") from exc
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "penalties computed for assignment %s (%d participants, first pass: %s)",
            assignment_id,
            len(rows),
            should_record,
        )

        return PenaltyReport(
            assignment_id=assignment_id,
            first_calculation=should_record,
            applied_max_penalty=max_penalty,
            participants=rows,
        )

    def _max_penalty(self, assignment: Assignment) -> int | None:
        if assignment.late_policy_id is None:
            return None
        return self.policies.find_by_id(assignment.late_policy_id).max_penalty

    def _record(self, participant: Participant, total: int) -> None:
        # reporting side channel: log and carry on
        try:
            self.display_sink.record(participant.id, total)
        except Exception:
            logger.exception("display recording failed for participant %s", participant.id)
