from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ActionBase(BaseModel):
    case_id: int = Field(..., gt=0)
    action_date: Optional[datetime] = Field(None, description="Por defecto, ahora")
    action_type: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    outcome: Optional[str] = Field(None, max_length=500)
    responsible: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=500)


class CreateActionRequest(ActionBase):
    pass


class UpdateActionRequest(ActionBase):
    pass


class ActionSummary(BaseModel):
    id: int
    case_id: int
    case_number: Optional[str] = None
    action_date: datetime
    action_type: str
    description: str
    outcome: Optional[str] = None
    responsible: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    modified_at: Optional[datetime] = None
