from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.permissions import require_instructor, require_staff
from app.models.assignment import Assignment
from app.models.participant import Participant
from app.models.user import User
from app.schemas.assignment import AssignmentCreate, AssignmentRead
from app.schemas.participant import ParticipantCreate, ParticipantRead
from app.services.stores import AssignmentStore, LatePolicyStore, ParticipantStore

router = APIRouter()


@router.post("", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    instructor: User = Depends(require_instructor),
):
    if payload.late_policy_id is not None:
        LatePolicyStore(db).find_by_id(payload.late_policy_id)

    assignment = Assignment(**payload.model_dump(), instructor_id=instructor.id)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


@router.get("/{assignment_id}", response_model=AssignmentRead)
def get_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    return AssignmentStore(db).find_by_id(assignment_id)


@router.get("/{assignment_id}/participants", response_model=list[ParticipantRead])
def list_participants(
    assignment_id: int,
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    AssignmentStore(db).find_by_id(assignment_id)
    return ParticipantStore(db).find_all_by_assignment(assignment_id)


@router.post(
    "/{assignment_id}/participants",
    response_model=ParticipantRead,
    status_code=status.HTTP_201_CREATED,
)
def add_participant(
    assignment_id: int,
    payload: ParticipantCreate,
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    AssignmentStore(db).find_by_id(assignment_id)
    if not db.query(User).filter(User.id == payload.user_id).first():
        raise HTTPException(status_code=404, detail="User not found")

    participant = Participant(parent_id=assignment_id, **payload.model_dump())
    db.add(participant)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Already a participant")

    db.refresh(participant)
    return participant
