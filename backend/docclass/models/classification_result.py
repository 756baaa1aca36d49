from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db import Base
from ..enums import ConfidenceLevel
from ..types import JSONBCompat


class ClassificationResult(Base):
    """
    Append-only record of one classification run.
    A document may be classified many times; rows are never updated.
    """
    __tablename__ = "classification_results"

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    confidence_level = Column(Enum(ConfidenceLevel), nullable=False)
    confidence_score = Column(Float, nullable=False)  # 0.000 - 1.000
    classification_method = Column(String, nullable=False)
    matched_criteria = Column(JSONBCompat, nullable=False, default=list)  # criterion names
    classified_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    document = relationship("Document", back_populates="classification_results")
    category = relationship("Category")
