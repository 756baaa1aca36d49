from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func
from ..db import Base

WEIGHT_QUANTUM = Decimal("0.01")


class Criterion(Base):
    """
    A named, weighted pattern rule belonging to exactly one category.
    The pattern is tried as a case-insensitive regex, falling back to a literal substring.
    """
    __tablename__ = "criteria"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    pattern = Column(String, nullable=False)
    weight = Column(Numeric(3, 2, asdecimal=False), nullable=False)  # 0.00 - 1.00
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    category = relationship("Category", back_populates="criteria")

    @validates("weight")
    def validate_weight(self, key, weight):
        """Round to two decimals, half up, so every backend scores the stored value"""
        if weight is None:
            return weight
        return float(Decimal(str(weight)).quantize(WEIGHT_QUANTUM, rounding=ROUND_HALF_UP))
