from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class AssignmentCreate(BaseModel):
    title: str
    late_policy_id: Optional[int] = None
    submission_due_at: Optional[datetime] = None
    review_due_at: Optional[datetime] = None
    meta_review_due_at: Optional[datetime] = None


class AssignmentRead(BaseModel):
    id: int
    title: str
    instructor_id: Optional[int]
    late_policy_id: Optional[int]
    submission_due_at: Optional[datetime]
    review_due_at: Optional[datetime]
    meta_review_due_at: Optional[datetime]
    is_penalty_calculated: bool
    created_at: datetime

    class Config:
        from_attributes = True
