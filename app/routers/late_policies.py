from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.permissions import require_instructor, require_staff
from app.models.late_policy import LatePolicy
from app.models.user import User
from app.schemas.late_policy import LatePolicyCreate, LatePolicyRead
from app.services.stores import LatePolicyStore

router = APIRouter()


@router.post("", response_model=LatePolicyRead, status_code=status.HTTP_201_CREATED)
def create_late_policy(
    payload: LatePolicyCreate,
    db: Session = Depends(get_db),
    instructor: User = Depends(require_instructor),
):
    policy = LatePolicy(**payload.model_dump(), instructor_id=instructor.id)
    db.add(policy)
    db.commit()
    db.refresh(policy)
    return policy


@router.get("", response_model=list[LatePolicyRead])
def list_late_policies(
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    return db.query(LatePolicy).order_by(LatePolicy.id.asc()).all()


@router.get("/{policy_id}", response_model=LatePolicyRead)
def get_late_policy(
    policy_id: int,
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff),
):
    return LatePolicyStore(db).find_by_id(policy_id)
