from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional, List, Literal
from datetime import datetime

MemberRole = Literal["parent", "child"]


def _required_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name must not be empty")
    return value


class FamilyUpdate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _required_name(value)


class FamilyResponse(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MemberCreate(BaseModel):
    name: str
    role: MemberRole = "child"
    email: Optional[EmailStr] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _required_name(value)


class MemberUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[MemberRole] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _required_name(value)


class MemberResponse(BaseModel):
    id: str
    email: str
    name: str
    role: MemberRole
    family_id: Optional[str] = None
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FamilyWithMembersResponse(FamilyResponse):
    members: List[MemberResponse] = []


class ProvisionResponse(BaseModel):
    family_id: str
    created: bool
