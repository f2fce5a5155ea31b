from datetime import date as date_type, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from domain.parent.parent_schema import ParentSummary
from domain.validators import IsoDate, not_null, required_text, valid_time


class AppointmentCreate(BaseModel):
    parent_id: UUID
    date: IsoDate
    time: str
    doctor: str
    specialty: str
    location: str
    reason: str
    notes: str = ""
    follow_up_needed: bool = False

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return valid_time(v)

    @field_validator("doctor")
    @classmethod
    def check_doctor(cls, v):
        return required_text(v, "Doctor name is required")

    @field_validator("specialty")
    @classmethod
    def check_specialty(cls, v):
        return required_text(v, "Specialty is required")

    @field_validator("location")
    @classmethod
    def check_location(cls, v):
        return required_text(v, "Location is required")

    @field_validator("reason")
    @classmethod
    def check_reason(cls, v):
        return required_text(v, "Reason is required")


class AppointmentUpdate(BaseModel):
    """부분 수정 허용 필드"""
    date: Optional[IsoDate] = None
    time: Optional[str] = None
    doctor: Optional[str] = None
    specialty: Optional[str] = None
    location: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    completed: Optional[bool] = None
    follow_up_needed: Optional[bool] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return not_null(v, "Valid date required (YYYY-MM-DD)")

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return valid_time(v)

    @field_validator("doctor")
    @classmethod
    def check_doctor(cls, v):
        return required_text(v, "Doctor name cannot be empty")

    @field_validator("specialty")
    @classmethod
    def check_specialty(cls, v):
        return required_text(v, "Specialty cannot be empty")

    @field_validator("location")
    @classmethod
    def check_location(cls, v):
        return required_text(v, "Location cannot be empty")

    @field_validator("reason")
    @classmethod
    def check_reason(cls, v):
        return required_text(v, "Reason cannot be empty")

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v):
        return not_null(v, "Notes must be a string")

    @field_validator("completed")
    @classmethod
    def check_completed(cls, v):
        return not_null(v, "Completed must be boolean")

    @field_validator("follow_up_needed")
    @classmethod
    def check_follow_up(cls, v):
        return not_null(v, "Follow up needed must be boolean")


class Appointment(BaseModel):
    id: str
    parent_id: str
    date: date_type
    time: str
    doctor: str
    specialty: str
    location: str
    reason: str
    notes: Optional[str] = ""
    completed: bool = False
    follow_up_needed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    parents: Optional[ParentSummary] = None


class AppointmentList(BaseModel):
    appointments: List[Appointment]


class AppointmentMessage(BaseModel):
    message: str
    appointment: Appointment
