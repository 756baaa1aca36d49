from dataclasses import dataclass
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from .. import models
from ..exceptions import (
    ClassificationError,
    DocumentNotFoundError,
    NoContentError,
    NoCriteriaError,
)
from .classification_engine import CLASSIFICATION_METHOD, EngineOutcome, run_classification
from .criteria_index import build_rules, load_criteria_with_categories

logger = logging.getLogger(__name__)

# Persisted scores carry three decimal places (0.000 - 1.000)
CONFIDENCE_SCORE_PRECISION = 3


@dataclass
class ClassificationOutcome:
    """Everything returned to the caller of a classify-document operation."""
    document: models.Document
    result: models.ClassificationResult
    category: models.Category
    matched_criteria_details: List[models.Criterion]


class ClassificationRepository:
    """SQLAlchemy-backed collaborator for fetching inputs and persisting results."""

    def __init__(self, db: Session):
        self.db = db

    def fetch_document_by_id(self, document_id: int) -> Optional[models.Document]:
        return self.db.query(models.Document).filter(models.Document.id == document_id).first()

    def fetch_all_criteria_with_category(self) -> List[Tuple[models.Criterion, models.Category]]:
        return load_criteria_with_categories(self.db)

    def persist_classification_result(self, result: models.ClassificationResult) -> models.ClassificationResult:
        try:
            self.db.add(result)
            self.db.commit()
            self.db.refresh(result)
        except Exception as e:
            logger.error(f"Failed to persist classification result for document {result.document_id}: {e}")
            self.db.rollback()
            raise
        return result


def build_classification_result(document_id: int, outcome: EngineOutcome) -> models.ClassificationResult:
    """Package an engine outcome as an unsaved result row."""
    return models.ClassificationResult(
        document_id=document_id,
        category_id=outcome.category_id,
        confidence_level=outcome.confidence.level,
        confidence_score=round(outcome.confidence.normalized_score, CONFIDENCE_SCORE_PRECISION),
        classification_method=CLASSIFICATION_METHOD,
        matched_criteria=outcome.matched_names,
    )


class DocumentClassificationService:
    """Runs the classify-document operation against a repository."""

    def __init__(self, repository: ClassificationRepository):
        self.repository = repository

    @classmethod
    def from_session(cls, db: Session) -> "DocumentClassificationService":
        return cls(ClassificationRepository(db))

    def classify_document(self, document_id: int) -> ClassificationOutcome:
        """
        Classify a stored document and append one ClassificationResult.

        Steps:
        1. Fetch the document; it must exist and carry text content
        2. Fetch all criteria with their categories; at least one must exist
        3. Score every category, pick the winner, map its confidence
        4. Persist the result and return it with the matched criteria records

        Raises:
            DocumentNotFoundError, NoContentError, NoCriteriaError, NoMatchError
        """
        logger.info(f"Starting classification for document {document_id}")
        try:
            document = self.repository.fetch_document_by_id(document_id)
            if document is None:
                raise DocumentNotFoundError(document_id)
            if not document.content:
                raise NoContentError(document_id)

            rows = self.repository.fetch_all_criteria_with_category()
            if not rows:
                raise NoCriteriaError()

            outcome = run_classification(document.content, build_rules(rows))
        except ClassificationError as e:
            logger.warning(f"Classification of document {document_id} failed ({e.kind}): {e}")
            raise

        result = self.repository.persist_classification_result(
            build_classification_result(document_id, outcome)
        )

        matched_ids = set(outcome.matched_ids)
        category = next(category for _, category in rows if category.id == outcome.category_id)
        matched_criteria_details = [criterion for criterion, _ in rows if criterion.id in matched_ids]

        logger.info(
            f"Document {document_id} classified as '{category.name}' "
            f"(raw score {outcome.raw_score:.2f}, {outcome.confidence.level.value} confidence, "
            f"{len(matched_criteria_details)} criteria matched)"
        )

        return ClassificationOutcome(
            document=document,
            result=result,
            category=category,
            matched_criteria_details=matched_criteria_details,
        )
