from typing import Literal

from pydantic import BaseModel, Field


class LatePolicyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    penalty_per_unit: int = Field(default=1, ge=0)
    penalty_unit: Literal["minute", "hour", "day"] = "hour"
    max_penalty: int = Field(ge=0)


class LatePolicyRead(BaseModel):
    id: int
    name: str
    instructor_id: int | None = None
    penalty_per_unit: int
    penalty_unit: str
    max_penalty: int

    class Config:
        from_attributes = True
