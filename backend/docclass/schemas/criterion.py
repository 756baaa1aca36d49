from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class CriterionBase(BaseModel):
    category_id: int
    name: str = Field(min_length=1)
    pattern: str = Field(min_length=1, description="Case-insensitive regex, or a literal keyword")
    weight: float = Field(ge=0, le=1, description="Weight added to the category score on a match; stored to two decimals")


class CriterionCreate(CriterionBase):
    pass


class CriterionUpdate(BaseModel):
    """Partial update; only fields that are sent are changed and none may be null"""
    category_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1)
    pattern: Optional[str] = Field(None, min_length=1)
    weight: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("category_id", "name", "pattern", "weight")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class Criterion(CriterionBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class CriterionWithCategory(Criterion):
    """Criterion joined with the display fields of its category"""
    category_name: str
    category_color: str


class CriteriaListResponse(BaseModel):
    criteria: List[CriterionWithCategory]


class DeleteResponse(BaseModel):
    success: bool
