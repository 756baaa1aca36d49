from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from ..enums import ConfidenceLevel
from .category import Category
from .criterion import Criterion
from .document import DocumentResponse


class ClassifyDocumentRequest(BaseModel):
    document_id: int


class ClassificationResultResponse(BaseModel):
    id: int
    document_id: int
    category_id: int
    confidence_level: ConfidenceLevel
    confidence_score: float = Field(ge=0, le=1)
    classification_method: str
    matched_criteria: List[str] = Field(description="Names of the criteria that contributed, in evaluation order")
    classified_at: datetime

    class Config:
        from_attributes = True


class ClassificationResponse(BaseModel):
    """Full outcome of a classify-document call"""
    document: DocumentResponse
    result: ClassificationResultResponse
    category: Category
    matched_criteria_details: List[Criterion]
