from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from .. import models, schemas
from ..dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    responses={404: {"description": "Not found"}},
)


def get_category_or_404(db: Session, category_id: int) -> models.Category:
    category = db.query(models.Category).filter(models.Category.id == category_id).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category with id {category_id} not found"
        )
    return category


@router.get("", response_model=List[schemas.Category])
def list_categories(db: Session = Depends(get_db)):
    """List all categories, oldest first"""
    return db.query(models.Category).order_by(models.Category.created_at, models.Category.id).all()


@router.post("", response_model=schemas.Category)
def create_category(category: schemas.CategoryCreate, db: Session = Depends(get_db)):
    """Create a new classification category"""
    db_category = models.Category(
        name=category.name,
        color=category.color,
        description=category.description
    )

    db.add(db_category)
    db.commit()
    db.refresh(db_category)

    logger.info(f"Created category {db_category.id} ({db_category.name})")
    return db_category


@router.get("/{category_id}", response_model=schemas.Category)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return get_category_or_404(db, category_id)


@router.patch("/{category_id}", response_model=schemas.Category)
def update_category(
    category_id: int,
    update: schemas.CategoryUpdate,
    db: Session = Depends(get_db)
):
    """Update name, color or description; omitted fields are left unchanged"""
    db_category = get_category_or_404(db, category_id)

    # description may be cleared with an explicit null; CategoryUpdate rejects null name and color
    for field_name, value in update.model_dump(exclude_unset=True).items():
        setattr(db_category, field_name, value)

    db.commit()
    db.refresh(db_category)
    return db_category


@router.delete("/{category_id}", response_model=schemas.DeleteResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    """
    Delete a category together with everything that references it:
    its classification results first, then its criteria, then the category.
    """
    db.query(models.ClassificationResult).filter(
        models.ClassificationResult.category_id == category_id
    ).delete(synchronize_session=False)
    db.query(models.Criterion).filter(
        models.Criterion.category_id == category_id
    ).delete(synchronize_session=False)
    deleted = db.query(models.Category).filter(
        models.Category.id == category_id
    ).delete(synchronize_session=False)
    db.commit()

    if deleted:
        logger.info(f"Deleted category {category_id} with its criteria and results")
    return schemas.DeleteResponse(success=deleted > 0)
