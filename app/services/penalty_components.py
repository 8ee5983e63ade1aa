"""
Raw late-penalty components for a participant.

A component source is any callable ``(assignment, participant, policies)``
returning ``PenaltyComponents``. The penalty engine sums and clamps whatever
the source returns; it does not care how the numbers were produced.
"""
import math
from datetime import datetime, timezone
from typing import NamedTuple

from app.core.config import DEFAULT_PENALTY_PER_UNIT, DEFAULT_PENALTY_UNIT, GRACE_PERIOD_MINUTES
from app.models.assignment import Assignment
from app.models.participant import Participant

UNIT_SECONDS = {"minute": 60, "hour": 60 * 60, "day": 24 * 60 * 60}


class PenaltyComponents(NamedTuple):
    submission: int
    review: int
    meta_review: int

    @property
    def raw_total(self) -> int:
        return self.submission + self.review + self.meta_review


def _as_utc(value: datetime) -> datetime:
    # SQLite often returns naive datetimes; treat as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def late_seconds(done_at: datetime | None, due_at: datetime | None) -> float:
    """
    Seconds between the deadline and the activity.

    0 when either time is missing, the activity was on time, or it falls
    within the grace period.
    """
    if done_at is None or due_at is None:
        return 0

    done = _as_utc(done_at)
    due = _as_utc(due_at)
    if done <= due:
        return 0

    seconds = (done - due).total_seconds()
    if seconds <= GRACE_PERIOD_MINUTES * 60:
        return 0
    return seconds


def late_units(done_at: datetime | None, due_at: datetime | None, unit: str) -> int:
    """Number of started `unit`s of lateness (see `late_seconds`)."""
    # ceil, so 1 second past the deadline counts as one unit
    return int(math.ceil(late_seconds(done_at, due_at) / UNIT_SECONDS[unit]))


def stored_components(assignment: Assignment, participant: Participant, policies) -> PenaltyComponents:
    """Use the raw components already on the participant row (e.g. set by staff)."""
    return PenaltyComponents(
        submission=participant.submission_penalty or 0,
        review=participant.review_penalty or 0,
        meta_review=participant.meta_review_penalty or 0,
    )


def deadline_components(assignment: Assignment, participant: Participant, policies) -> PenaltyComponents:
    """Charge each activity per started unit of lateness against its deadline."""
    activities = (
        (participant.submitted_at, assignment.submission_due_at),
        (participant.reviewed_at, assignment.review_due_at),
        (participant.meta_reviewed_at, assignment.meta_review_due_at),
    )
    # nothing late: no rate needed, so the policy is not looked up
    if not any(late_seconds(done_at, due_at) for done_at, due_at in activities):
        return PenaltyComponents(0, 0, 0)

    if assignment.late_policy_id is not None:
        policy = policies.find_by_id(assignment.late_policy_id)
        unit, per_unit = policy.penalty_unit, policy.penalty_per_unit
    else:
        unit, per_unit = DEFAULT_PENALTY_UNIT, DEFAULT_PENALTY_PER_UNIT

    submission, review, meta_review = (
        late_units(done_at, due_at, unit) * per_unit for done_at, due_at in activities
    )
    return PenaltyComponents(submission=submission, review=review, meta_review=meta_review)


COMPONENT_SOURCES = {
    "deadlines": deadline_components,
    "stored": stored_components,
}
