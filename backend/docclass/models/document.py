from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db import Base
from ..enums import FileType


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String, nullable=False)
    file_type = Column(Enum(FileType), nullable=False)
    file_size = Column(Integer, nullable=False)  # bytes
    content = Column(Text, nullable=True)  # Extracted text, required for classification
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    classification_results = relationship(
        "ClassificationResult",
        back_populates="document",
        order_by="ClassificationResult.id",
    )
