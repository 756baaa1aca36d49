from typing import List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status, UploadFile
import logging
import os

from .. import models
from ..core.settings import get_settings
from ..enums import FileType
from ..schemas import DocumentCreate

logger = logging.getLogger(__name__)


class FileValidationService:
    """Service for file validation operations."""

    @staticmethod
    def get_file_size(file: UploadFile) -> int:
        """Get file size in bytes"""
        if not hasattr(file.file, 'seek') or not hasattr(file.file, 'tell'):
            return 0

        current_pos = file.file.tell()
        file.file.seek(0, 2)
        file_size = file.file.tell()
        file.file.seek(current_pos)

        return file_size

    @staticmethod
    def validate_file_size(file_size: int, max_size: int) -> bool:
        """Validate file size is non-empty and under the limit"""
        return 0 < file_size <= max_size

    @staticmethod
    def get_file_type_from_filename(filename: str) -> FileType:
        """Get FileType enum from filename extension"""
        extension = os.path.splitext(filename)[1].lower()

        if extension == ".pdf":
            return FileType.PDF
        elif extension == ".docx":
            return FileType.DOCX
        elif extension == ".txt":
            return FileType.TXT
        else:
            raise ValueError(f"Unsupported file extension: {extension}")


class TextContentService:
    """Service for deciding which text content a stored document carries."""

    @staticmethod
    def decode_text(raw: bytes) -> str:
        """Decode plain-text uploads; undecodable bytes are replaced rather than rejected"""
        text = raw.decode("utf-8", errors="replace")
        # Strip a UTF-8 byte order mark so it never becomes part of the matched text
        return text.lstrip("\ufeff")

    @staticmethod
    def resolve_content(file_type: FileType, raw: bytes, supplied_content: Optional[str]) -> Optional[str]:
        """
        Pick the classification text for an upload:
        - explicitly supplied text always wins
        - TXT files are decoded directly
        - PDF/DOCX carry no content (binary text extraction is not performed)
        """
        if supplied_content:
            return supplied_content
        if file_type == FileType.TXT:
            return TextContentService.decode_text(raw) or None
        return None


class DocumentProcessingService:
    """Service for document registration and upload operations."""

    @staticmethod
    def create_document(db: Session, document: DocumentCreate) -> models.Document:
        """Store a document record with optional pre-extracted text"""
        db_document = models.Document(
            filename=document.filename,
            file_type=document.file_type,
            file_size=document.file_size,
            content=document.content or None,
        )

        db.add(db_document)
        db.commit()
        db.refresh(db_document)

        logger.info(f"Registered document {db_document.id} ({db_document.filename}, {db_document.file_type.value})")
        return db_document

    @staticmethod
    async def process_upload(
        file: UploadFile,
        db: Session,
        content: Optional[str] = None
    ) -> models.Document:
        """Validate a multipart upload and store it as a document"""
        settings = get_settings()

        if not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Filename is required"
            )

        try:
            file_type = FileValidationService.get_file_type_from_filename(file.filename)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file type. Only PDF, DOCX, and TXT files are allowed."
            )

        file_size = FileValidationService.get_file_size(file)
        if not FileValidationService.validate_file_size(file_size, settings.max_upload_size):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File must be non-empty and no larger than {settings.max_upload_size / (1024*1024):.1f}MB"
            )

        raw = await file.read()
        document = DocumentProcessingService.create_document(
            db,
            DocumentCreate(
                filename=file.filename,
                file_type=file_type,
                file_size=file_size,
                content=TextContentService.resolve_content(file_type, raw, content),
            )
        )

        if document.content is None:
            logger.info(f"Document {document.id} stored without text content; it cannot be classified yet")

        return document


class DocumentQueryService:
    """Service for document query operations."""

    @staticmethod
    def list_documents(db: Session) -> List[models.Document]:
        return db.query(models.Document).order_by(models.Document.uploaded_at, models.Document.id).all()

    @staticmethod
    def get_document_or_404(db: Session, document_id: int) -> models.Document:
        document = db.query(models.Document).filter(models.Document.id == document_id).first()
        if not document:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Document not found"
            )
        return document

    @staticmethod
    def list_classification_results(
        db: Session,
        document_id: Optional[int] = None
    ) -> List[models.ClassificationResult]:
        """Classification history, oldest first, optionally for one document"""
        query = db.query(models.ClassificationResult)
        if document_id is not None:
            query = query.filter(models.ClassificationResult.document_id == document_id)
        return query.order_by(models.ClassificationResult.id).all()
