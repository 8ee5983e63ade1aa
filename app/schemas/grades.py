from pydantic import BaseModel


class ActionAllowed(BaseModel):
    allowed: bool
