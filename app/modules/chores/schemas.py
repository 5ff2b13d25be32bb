from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import date, datetime

ChoreStatus = Literal["open", "in_progress", "completed"]
ChoreFilter = Literal["all", "open", "completed"]


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ChoreCreate(BaseModel):
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    points: int = Field(default=10, ge=0)
    due_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title must not be empty")
        return value

    @field_validator("description", "assigned_to")
    @classmethod
    def optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class ChoreUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    points: Optional[int] = Field(default=None, ge=0)
    status: Optional[ChoreStatus] = None
    due_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Title must not be empty")
        return value


class ChoreResponse(BaseModel):
    id: str
    family_id: str
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    assignee_name: Optional[str] = None
    points: int = 10
    status: ChoreStatus = "open"
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChoreCounts(BaseModel):
    all: int = 0
    open: int = 0
    completed: int = 0


class ChoreListResponse(BaseModel):
    filter: ChoreFilter = "all"
    items: List[ChoreResponse]
    counts: ChoreCounts
