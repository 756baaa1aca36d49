from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..dependencies import get_db
from ..core.settings import get_settings
from ..exceptions import (
    ClassificationError,
    DocumentNotFoundError,
    NoContentError,
    NoCriteriaError,
    NoMatchError
)
from ..schemas import (
    DocumentCreate,
    DocumentResponse,
    DocumentUploadResponse,
    ClassifyDocumentRequest,
    ClassificationResponse,
    ClassificationResultResponse,
    Category,
    Criterion
)
from ..services.classification_service import DocumentClassificationService
from ..services.document_service import DocumentProcessingService, DocumentQueryService
from ..tasks.classification_tasks import dispatch_classification_task

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

CLASSIFICATION_ERROR_STATUS = {
    DocumentNotFoundError: status.HTTP_404_NOT_FOUND,
    NoContentError: 422,
    NoCriteriaError: status.HTTP_409_CONFLICT,
    NoMatchError: 422,
}


def classification_http_error(error: ClassificationError) -> HTTPException:
    """Map a classification failure onto its HTTP status, tagging the error kind in a header"""
    return HTTPException(
        status_code=CLASSIFICATION_ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail=str(error),
        headers={"X-Classification-Error": error.kind}
    )


def classify_and_respond(document_id: int, db: Session) -> ClassificationResponse:
    try:
        outcome = DocumentClassificationService.from_session(db).classify_document(document_id)
    except ClassificationError as e:
        raise classification_http_error(e)

    return ClassificationResponse(
        document=DocumentResponse.model_validate(outcome.document),
        result=ClassificationResultResponse.model_validate(outcome.result),
        category=Category.model_validate(outcome.category),
        matched_criteria_details=[Criterion.model_validate(c) for c in outcome.matched_criteria_details]
    )


@router.get("/documents", response_model=List[DocumentResponse])
def list_documents(db: Session = Depends(get_db)):
    """List all documents in upload order"""
    return DocumentQueryService.list_documents(db)


@router.post("/documents", response_model=DocumentResponse)
def create_document(document: DocumentCreate, db: Session = Depends(get_db)):
    """
    Register a document whose text has already been extracted.

    Documents without content are accepted but cannot be classified until
    content is available.
    """
    return DocumentProcessingService.create_document(db, document)


@router.post("/documents/upload", response_model=DocumentUploadResponse)
async def upload_document(
    file: UploadFile = File(...),
    content: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """
    Upload a single document with the following validations:
    - File type must be PDF, DOCX, or TXT
    - File must be non-empty and within the configured size limit
    - TXT files are decoded as UTF-8 text; PDF/DOCX need `content` supplied alongside

    When auto-classification is enabled and text is available, a background
    classification task is queued.
    """
    document = await DocumentProcessingService.process_upload(file, db, content)

    task_id = None
    if get_settings().auto_classify_on_upload and document.content:
        task_id = dispatch_classification_task(document.id)

    return DocumentUploadResponse(
        document=DocumentResponse.model_validate(document),
        has_content=bool(document.content),
        classification_task_id=task_id
    )


@router.get("/documents/{document_id}", response_model=DocumentResponse)
def get_document(document_id: int, db: Session = Depends(get_db)):
    return DocumentQueryService.get_document_or_404(db, document_id)


@router.post("/documents/{document_id}/classify", response_model=ClassificationResponse)
def classify_document(document_id: int, db: Session = Depends(get_db)):
    """
    Classify a document against all configured criteria.

    Every call appends a new classification result; earlier results are kept.

    Errors:
    - 404: document does not exist
    - 409: no criteria are configured
    - 422: document has no text content, or no criterion matched
    """
    return classify_and_respond(document_id, db)


@router.post("/classify", response_model=ClassificationResponse)
def classify(request: ClassifyDocumentRequest, db: Session = Depends(get_db)):
    """Classify the document named in the request body"""
    return classify_and_respond(request.document_id, db)


@router.get("/documents/{document_id}/classifications", response_model=List[ClassificationResultResponse])
def list_document_classifications(document_id: int, db: Session = Depends(get_db)):
    """Classification history for a single document, oldest first"""
    DocumentQueryService.get_document_or_404(db, document_id)
    return DocumentQueryService.list_classification_results(db, document_id=document_id)


@router.get("/classifications", response_model=List[ClassificationResultResponse])
def list_classifications(db: Session = Depends(get_db)):
    """All classification results, oldest first"""
    return DocumentQueryService.list_classification_results(db)
