from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator

from domain.validators import IsoDate, not_null, required_text


class Relationship(str, Enum):
    MOM = "mom"
    DAD = "dad"
    GUARDIAN = "guardian"


class CommunicationStyle(str, Enum):
    CALLS = "calls"
    TEXTS = "texts"
    VISITS = "visits"
    EMAILS = "emails"


def _check_age(v: Optional[int]) -> Optional[int]:
    if v is not None and not 1 <= v <= 150:
        raise ValueError("Age must be between 1 and 150")
    return v


class ParentCreate(BaseModel):
    name: str
    age: Optional[int] = None
    birth_date: Optional[IsoDate] = None
    relationship: Relationship
    personality: List[str] = []
    interests: List[str] = []
    challenges: List[str] = []
    communication_style: Optional[CommunicationStyle] = None
    relationship_goals: List[str] = []

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return required_text(v, "Name is required")

    @field_validator("age")
    @classmethod
    def check_age(cls, v):
        return _check_age(v)


class ParentUpdate(BaseModel):
    """부분 수정용. 여기 정의된 필드만 수정 가능 (그 외 필드는 무시)"""
    name: Optional[str] = None
    age: Optional[int] = None
    birth_date: Optional[IsoDate] = None
    relationship: Optional[Relationship] = None
    personality: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    challenges: Optional[List[str]] = None
    communication_style: Optional[CommunicationStyle] = None
    relationship_goals: Optional[List[str]] = None
    last_contact: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return required_text(v, "Name cannot be empty")

    @field_validator("age")
    @classmethod
    def check_age(cls, v):
        return _check_age(v)

    @field_validator("relationship")
    @classmethod
    def check_relationship(cls, v):
        return not_null(v, "Invalid relationship type")

    @field_validator("personality", "interests", "challenges", "relationship_goals")
    @classmethod
    def check_tags(cls, v):
        return not_null(v, "Must be an array")


class Parent(BaseModel):
    id: str
    user_id: str
    name: str
    age: Optional[int] = None
    birth_date: Optional[date] = None
    relationship: Optional[Relationship] = None
    personality: List[str] = []
    interests: List[str] = []
    challenges: List[str] = []
    communication_style: Optional[CommunicationStyle] = None
    relationship_goals: List[str] = []
    last_contact: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ParentSummary(BaseModel):
    """자식 행에 함께 내려오는 부모 정보"""
    id: Optional[str] = None
    name: Optional[str] = None
    user_id: Optional[str] = None


class ParentList(BaseModel):
    parents: List[Parent]


class ParentDetail(BaseModel):
    parent: Parent


class ParentMessage(BaseModel):
    message: str
    parent: Parent


class ParentInsights(BaseModel):
    parent_id: str
    age: Optional[int] = None
    life_expectancy: int
    years_remaining: Optional[int] = None
    days_remaining: Optional[int] = None
    weeks_remaining: Optional[int] = None
    contacts_per_year: int
    contacts_remaining: Optional[int] = None
    days_since_last_contact: Optional[int] = None
