from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db import Base


class Category(Base):
    """
    Represents a classification category that documents are sorted into.
    Each category owns a set of weighted criteria and is shown with a colored badge.
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    color = Column(String(7), nullable=False)  # Hex color code, e.g. #3B82F6
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    criteria = relationship("Criterion", back_populates="category", order_by="Criterion.id")
