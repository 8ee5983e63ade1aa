from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ParticipantCreate(BaseModel):
    user_id: int
    handle: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    meta_reviewed_at: Optional[datetime] = None

    # raw components staff can set directly (used by the "stored" source)
    submission_penalty: int = Field(default=0, ge=0)
    review_penalty: int = Field(default=0, ge=0)
    meta_review_penalty: int = Field(default=0, ge=0)


class ParticipantRead(BaseModel):
    id: int
    parent_id: int
    user_id: int
    handle: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    meta_reviewed_at: Optional[datetime] = None

    submission_penalty: int
    review_penalty: int
    meta_review_penalty: int
    total_penalty: int

    class Config:
        from_attributes = True
