# Import and re-export all models so callers can use `from docclass import models`

# Import Base from db module
from ..db import Base

# Import all models from their individual files
from .category import Category
from .criterion import Criterion
from .document import Document
from .classification_result import ClassificationResult

# Ensure all models are available at package level
__all__ = [
    "Base",
    "Category",
    "Criterion",
    "Document",
    "ClassificationResult",
]
