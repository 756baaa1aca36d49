import logging
from sqlalchemy.exc import OperationalError

from docclass.core.celery import celery_app
from docclass.db import get_db
from docclass.exceptions import ClassificationError
from docclass.services.classification_service import DocumentClassificationService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True)
def classify_document_task(self, document_id: int) -> dict:
    """
    Classify a stored document in a worker.

    Classification errors (missing document, no content, no criteria, no match)
    are terminal and reported in the returned payload. Only a dropped database
    connection is retried.

    Args:
        document_id: ID of the document to classify

    Returns:
        Dictionary with classification results
    """
    db = None
    try:
        logger.info(f"Starting background classification for document {document_id}")

        db = next(get_db())
        outcome = DocumentClassificationService.from_session(db).classify_document(document_id)

        return {
            "document_id": document_id,
            "status": "completed",
            "result_id": outcome.result.id,
            "category_id": outcome.category.id,
            "category_name": outcome.category.name,
            "confidence_level": outcome.result.confidence_level.value,
            "confidence_score": outcome.result.confidence_score,
            "matched_criteria": list(outcome.result.matched_criteria),
        }

    except ClassificationError as exc:
        logger.warning(f"Background classification failed for document {document_id}: {exc}")
        return {
            "document_id": document_id,
            "status": "failed",
            "error": exc.kind,
            "message": str(exc),
        }

    except OperationalError as exc:
        logger.error(f"Database unavailable while classifying document {document_id}: {exc}")
        raise self.retry(exc=exc, countdown=60, max_retries=3)

    finally:
        if db:
            db.close()


def dispatch_classification_task(document_id: int) -> str:
    """
    Dispatch classification task to Celery worker

    Args:
        document_id: ID of the document to classify

    Returns:
        Task ID for tracking
    """
    task = classify_document_task.delay(document_id)
    logger.info(f"Dispatched classification task {task.id} for document {document_id}")
    return task.id
