from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from ..enums import FileType


class DocumentBase(BaseModel):
    """Base document schema"""
    filename: str = Field(min_length=1)
    file_type: FileType
    file_size: int = Field(gt=0, description="File size in bytes")


class DocumentCreate(DocumentBase):
    """Schema for registering a document with already-extracted text"""
    content: Optional[str] = Field(None, description="Extracted text content used for classification")


class DocumentResponse(DocumentBase):
    """Schema for document response"""
    id: int
    content: Optional[str] = None
    uploaded_at: datetime

    class Config:
        from_attributes = True


class DocumentUploadResponse(BaseModel):
    """Response for the multipart upload endpoint"""
    document: DocumentResponse
    has_content: bool = Field(description="True if text content is available for classification")
    classification_task_id: Optional[str] = Field(None, description="Celery task ID when auto-classification was queued")
