from pydantic import BaseModel, field_validator
from typing import Optional, List, Literal
from datetime import datetime

ShoppingFilter = Literal["all", "needed", "purchased"]


class ShoppingItemCreate(BaseModel):
    name: str
    category: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Item name must not be empty")
        return value

    @field_validator("category")
    @classmethod
    def blank_category(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class ShoppingItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    checked: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Item name must not be empty")
        return value


class ShoppingItemResponse(BaseModel):
    id: str
    family_id: str
    name: str
    checked: bool = False
    category: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ShoppingCounts(BaseModel):
    all: int = 0
    needed: int = 0
    purchased: int = 0


class ShoppingListResponse(BaseModel):
    filter: ShoppingFilter = "all"
    items: List[ShoppingItemResponse]
    counts: ShoppingCounts
