from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.core.permissions import action_allowed, require_staff
from app.models.participant import Participant
from app.models.user import User
from app.schemas.grades import ActionAllowed
from app.schemas.penalty import ParticipantPenaltyRead, PenaltyReport
from app.services.penalty_components import COMPONENT_SOURCES
from app.services.penalty_engine import PenaltyEngine, penalty_row
from app.services.stores import AssignmentStore, ParticipantStore

router = APIRouter()


@router.get(
    "/grades/action_allowed",
    response_model=ActionAllowed,
    responses={403: {"model": ActionAllowed}},
)
def grades_action_allowed(
    requested_action: str,
    assignment_id: int | None = None,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    is_participant = False
    if assignment_id is not None:
        is_participant = (
            db.query(Participant)
            .filter(Participant.parent_id == assignment_id, Participant.user_id == me.id)
            .first()
            is not None
        )

    allowed = action_allowed(me, requested_action, is_participant=is_participant)
    return JSONResponse(status_code=200 if allowed else 403, content={"allowed": allowed})


@router.post("/assignments/{assignment_id}/penalties", response_model=PenaltyReport)
def compute_assignment_penalties(
    assignment_id: int,
    source: Literal["deadlines", "stored"] = Query("deadlines"),
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    engine = PenaltyEngine(db, component_source=COMPONENT_SOURCES[source])
    return engine.compute_penalties(assignment_id)


@router.get("/assignments/{assignment_id}/penalties", response_model=list[ParticipantPenaltyRead])
def list_assignment_penalties(
    assignment_id: int,
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    AssignmentStore(db).find_by_id(assignment_id)
    participants = ParticipantStore(db).find_all_by_assignment(assignment_id)
    return [penalty_row(p) for p in sorted(participants, key=lambda p: p.id)]


@router.get("/assignments/{assignment_id}/penalties/me", response_model=ParticipantPenaltyRead)
def my_assignment_penalty(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    AssignmentStore(db).find_by_id(assignment_id)
    return penalty_row(ParticipantStore(db).find_for_user(assignment_id, me.id))
