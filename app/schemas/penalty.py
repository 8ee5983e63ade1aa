from pydantic import BaseModel


class ParticipantPenaltyRead(BaseModel):
    participant_id: int
    user_id: int
    submission_penalty: int
    review_penalty: int
    meta_review_penalty: int
    total_penalty: int


class PenaltyReport(BaseModel):
    assignment_id: int
    # True only for the pass that flipped is_penalty_calculated
    first_calculation: bool
    # ceiling used in this pass; None when uncapped or when no total was positive
    # (the policy is only looked up once a total needs capping)
    applied_max_penalty: int | None = None
    participants: list[ParticipantPenaltyRead]
