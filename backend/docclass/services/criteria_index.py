from typing import List, Tuple
from sqlalchemy.orm import Session

from .. import models
from .classification_engine import CriterionRule


def load_criteria_with_categories(db: Session) -> List[Tuple[models.Criterion, models.Category]]:
    """
    Fetch every criterion joined with its category.

    Rows are ordered by category id, then criterion id. The selector's
    first-seen tie-break follows this order, so it must stay stable between calls.
    """
    return (
        db.query(models.Criterion, models.Category)
        .join(models.Category, models.Criterion.category_id == models.Category.id)
        .order_by(models.Category.id, models.Criterion.id)
        .all()
    )


def build_rules(rows: List[Tuple[models.Criterion, models.Category]]) -> List[CriterionRule]:
    """Flatten joined rows into engine rules, keeping row order"""
    return [
        CriterionRule(
            criterion_id=criterion.id,
            category_id=category.id,
            name=criterion.name,
            pattern=criterion.pattern,
            weight=float(criterion.weight),
        )
        for criterion, category in rows
    ]
