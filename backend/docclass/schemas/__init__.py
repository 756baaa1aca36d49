# Category schemas
from .category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    Category
)

# Criterion schemas
from .criterion import (
    CriterionBase,
    CriterionCreate,
    CriterionUpdate,
    Criterion,
    CriterionWithCategory,
    CriteriaListResponse,
    DeleteResponse
)

# Document schemas
from .document import (
    DocumentBase,
    DocumentCreate,
    DocumentResponse,
    DocumentUploadResponse
)

# Classification schemas
from .classification import (
    ClassifyDocumentRequest,
    ClassificationResultResponse,
    ClassificationResponse
)

# Make all schemas available at package level
__all__ = [
    # Category
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "Category",
    # Criterion
    "CriterionBase",
    "CriterionCreate",
    "CriterionUpdate",
    "Criterion",
    "CriterionWithCategory",
    "CriteriaListResponse",
    "DeleteResponse",
    # Document
    "DocumentBase",
    "DocumentCreate",
    "DocumentResponse",
    "DocumentUploadResponse",
    # Classification
    "ClassifyDocumentRequest",
    "ClassificationResultResponse",
    "ClassificationResponse"
]
