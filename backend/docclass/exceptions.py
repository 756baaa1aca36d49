"""
Classification error taxonomy.

Every error is terminal for a single classify request and is never retried
automatically; the caller may resubmit once the underlying data is fixed.
A malformed criterion pattern is not an error here: it is recovered inside
the scorer by falling back to a substring test.
"""


class ClassificationError(Exception):
    """Base class for classify-document failures"""
    kind = "classification_error"


class DocumentNotFoundError(ClassificationError):
    """The requested document id does not exist"""
    kind = "document_not_found"

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found")


class NoContentError(ClassificationError):
    """The document has no extracted text to classify"""
    kind = "no_content"

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Document {document_id} has no extractable content for classification")


class NoCriteriaError(ClassificationError):
    """No classification criteria are configured"""
    kind = "no_criteria"

    def __init__(self):
        super().__init__("No classification criteria available")


class NoMatchError(ClassificationError):
    """Every category scored zero against the document"""
    kind = "no_match"

    def __init__(self, message: str = "No matching classification criteria found for this document"):
        super().__init__(message)
