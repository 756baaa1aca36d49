from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategoryBase(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(pattern=HEX_COLOR_PATTERN, description="Hex color code for the category badge")
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    """Partial update; only fields that are sent are changed. Only description may be set to null."""
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    description: Optional[str] = None

    @field_validator("name", "color")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class Category(CategoryBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
