from fastapi import Depends, HTTPException, status

from app.core.current_user import get_current_user
from app.models.user import User


def require_instructor(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "instructor":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Instructor role required",
        )
    return current_user


def require_staff(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Instructor or TA role required",
        )
    return current_user


# grade actions and who may perform them
STAFF_ACTIONS = {"view_penalties", "compute_penalties"}
# students: only for an assignment they participate in (no team model; the
# participants of an assignment are the team whose feedback view_team shows)
STUDENT_ACTIONS = {"view_my_scores", "view_team"}


def action_allowed(user: User, requested_action: str, is_participant: bool = False) -> bool:
    """
    TA and instructor may perform every grade action.
    A student may only view their own scores or their team, and only as a
    participant of the assignment.
    """
    if requested_action not in STAFF_ACTIONS | STUDENT_ACTIONS:
        return False
    if user.is_staff:
        return True
    return requested_action in STUDENT_ACTIONS and is_participant
