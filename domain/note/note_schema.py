from datetime import date as date_type, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from domain.parent.parent_schema import ParentSummary
from domain.validators import IsoDate, not_null, required_text


class NoteType(str, Enum):
    APPOINTMENT = "appointment"
    MEDICATION = "medication"
    SYMPTOM = "symptom"
    GENERAL = "general"


class NoteCreate(BaseModel):
    parent_id: UUID
    date: IsoDate
    type: NoteType
    title: str
    content: str

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        return required_text(v, "Title is required")

    @field_validator("content")
    @classmethod
    def check_content(cls, v):
        return required_text(v, "Content is required")


class NoteUpdate(BaseModel):
    date: Optional[IsoDate] = None
    type: Optional[NoteType] = None
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return not_null(v, "Valid date required (YYYY-MM-DD)")

    @field_validator("type")
    @classmethod
    def check_type(cls, v):
        return not_null(v, "Invalid note type")

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        return required_text(v, "Title cannot be empty")

    @field_validator("content")
    @classmethod
    def check_content(cls, v):
        return required_text(v, "Content cannot be empty")


class Note(BaseModel):
    id: str
    parent_id: str
    date: date_type
    type: NoteType
    title: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    parents: Optional[ParentSummary] = None


class NoteList(BaseModel):
    notes: List[Note]


class NoteMessage(BaseModel):
    message: str
    note: Note
