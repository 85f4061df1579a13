from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1)


class GroupResponse(BaseModel):
    id: str
    name: str
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class GroupMembershipResponse(BaseModel):
    user_id: str
    group_id: Optional[str] = None
    message: str
