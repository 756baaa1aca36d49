from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from .. import models, schemas
from ..dependencies import get_db
from ..services.criteria_index import load_criteria_with_categories

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/criteria",
    tags=["Criteria"],
    responses={404: {"description": "Not found"}},
)


def ensure_category_exists(db: Session, category_id: int) -> None:
    exists = db.query(models.Category.id).filter(models.Category.id == category_id).first()
    if not exists:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category with id {category_id} does not exist"
        )


@router.get("", response_model=schemas.CriteriaListResponse)
def list_criteria(db: Session = Depends(get_db)):
    """List all criteria with the name and color of their category"""
    rows = load_criteria_with_categories(db)
    return schemas.CriteriaListResponse(
        criteria=[
            schemas.CriterionWithCategory(
                id=criterion.id,
                category_id=criterion.category_id,
                category_name=category.name,
                category_color=category.color,
                name=criterion.name,
                pattern=criterion.pattern,
                weight=criterion.weight,
                created_at=criterion.created_at,
            )
            for criterion, category in rows
        ]
    )


@router.post("", response_model=schemas.Criterion)
def create_criterion(criterion: schemas.CriterionCreate, db: Session = Depends(get_db)):
    """Create a criterion for an existing category"""
    ensure_category_exists(db, criterion.category_id)

    db_criterion = models.Criterion(
        category_id=criterion.category_id,
        name=criterion.name,
        pattern=criterion.pattern,
        weight=criterion.weight
    )

    db.add(db_criterion)
    db.commit()
    db.refresh(db_criterion)

    logger.info(f"Created criterion {db_criterion.id} ({db_criterion.name}) for category {db_criterion.category_id}")
    return db_criterion


@router.patch("/{criterion_id}", response_model=schemas.Criterion)
def update_criterion(
    criterion_id: int,
    update: schemas.CriterionUpdate,
    db: Session = Depends(get_db)
):
    """Update a criterion; moving it to another category requires that category to exist"""
    db_criterion = db.query(models.Criterion).filter(models.Criterion.id == criterion_id).first()
    if not db_criterion:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Criteria with id {criterion_id} not found"
        )

    changes = update.model_dump(exclude_unset=True)
    if "category_id" in changes:
        ensure_category_exists(db, changes["category_id"])

    for field_name, value in changes.items():
        setattr(db_criterion, field_name, value)

    db.commit()
    db.refresh(db_criterion)
    return db_criterion


@router.delete("/{criterion_id}", response_model=schemas.DeleteResponse)
def delete_criterion(criterion_id: int, db: Session = Depends(get_db)):
    deleted = db.query(models.Criterion).filter(
        models.Criterion.id == criterion_id
    ).delete(synchronize_session=False)
    db.commit()
    return schemas.DeleteResponse(success=deleted > 0)
