from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class AppointmentBase(BaseModel):
    case_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    starts_at: datetime
    ends_at: datetime
    location: Optional[str] = Field(None, max_length=200)
    appointment_type: str = Field(..., min_length=1, max_length=100)
    participants: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_range(self):
        if self.ends_at < self.starts_at:
            raise ValueError("ends_at no puede ser anterior a starts_at")
        return self


class CreateAppointmentRequest(AppointmentBase):
    pass


class UpdateAppointmentRequest(AppointmentBase):
    completed: bool = False


class MarkCompletedRequest(BaseModel):
    completed: bool = True


class AppointmentSummary(BaseModel):
    id: int
    case_id: int
    case_number: Optional[str] = None
    title: str
    description: Optional[str] = None
    starts_at: datetime
    ends_at: datetime
    location: Optional[str] = None
    appointment_type: str
    participants: Optional[str] = None
    completed: bool
    notes: Optional[str] = None
    created_at: datetime
    modified_at: Optional[datetime] = None
