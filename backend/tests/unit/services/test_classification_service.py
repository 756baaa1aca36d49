import pytest
from types import SimpleNamespace
from unittest.mock import Mock

from docclass import models
from docclass.enums import ConfidenceLevel
from docclass.exceptions import (
    DocumentNotFoundError,
    NoContentError,
    NoCriteriaError,
    NoMatchError,
)
from docclass.services.classification_engine import CriterionRule, EngineOutcome, map_confidence
from docclass.services.classification_service import (
    ClassificationRepository,
    DocumentClassificationService,
    build_classification_result,
)


class InMemoryRepository:
    """Repository double that records persisted results."""

    def __init__(self, documents=None, rows=None):
        self.documents = documents or {}
        self.rows = rows or []
        self.persisted = []
        self.criteria_fetches = 0

    def fetch_document_by_id(self, document_id):
        return self.documents.get(document_id)

    def fetch_all_criteria_with_category(self):
        self.criteria_fetches += 1
        return list(self.rows)

    def persist_classification_result(self, result):
        result.id = len(self.persisted) + 1
        self.persisted.append(result)
        return result


def category(category_id, name):
    return SimpleNamespace(id=category_id, name=name, color="#000000", description=None)


def criterion(criterion_id, category_id, name, pattern, weight):
    return SimpleNamespace(id=criterion_id, category_id=category_id, name=name, pattern=pattern, weight=weight)


class TestBuildClassificationResult:

    def test_result_fields_derive_from_outcome(self):
        outcome = EngineOutcome(
            category_id=7,
            raw_score=0.85,
            confidence=map_confidence(0.85),
            matched=[CriterionRule(criterion_id=3, category_id=7, name="Technical Keywords",
                                   pattern="technical", weight=0.85)],
        )

        result = build_classification_result(42, outcome)

        assert result.document_id == 42
        assert result.category_id == 7
        assert result.confidence_level == ConfidenceLevel.LOW
        assert result.confidence_score == 0.283
        assert result.classification_method == "Pattern Matching"
        assert result.matched_criteria == ["Technical Keywords"]


class TestDocumentClassificationServiceWithRepository:
    """Orchestration against an in-memory collaborator."""

    def test_missing_document(self):
        repository = InMemoryRepository()
        service = DocumentClassificationService(repository)

        with pytest.raises(DocumentNotFoundError, match="not found"):
            service.classify_document(999)
        assert repository.persisted == []

    @pytest.mark.parametrize("content", [None, ""])
    def test_empty_content_fails_before_scoring(self, content):
        repository = InMemoryRepository(documents={1: SimpleNamespace(id=1, content=content)})
        service = DocumentClassificationService(repository)

        with pytest.raises(NoContentError, match="no extractable content"):
            service.classify_document(1)
        # Criteria are never fetched when there is nothing to score
        assert repository.criteria_fetches == 0
        assert repository.persisted == []

    def test_no_criteria(self):
        repository = InMemoryRepository(documents={1: SimpleNamespace(id=1, content="text")})

        with pytest.raises(NoCriteriaError, match="No classification criteria available"):
            DocumentClassificationService(repository).classify_document(1)

    def test_no_match(self):
        business = category(1, "Business")
        repository = InMemoryRepository(
            documents={1: SimpleNamespace(id=1, content="nothing useful")},
            rows=[(criterion(1, 1, "Unmatchable", "xyzzyx123456", 0.8), business)],
        )

        with pytest.raises(NoMatchError):
            DocumentClassificationService(repository).classify_document(1)
        assert repository.persisted == []

    def test_success_persists_one_result(self):
        business = category(1, "Business")
        legal = category(2, "Legal")
        rows = [
            (criterion(1, 1, "Business Keywords", "business|company", 0.80), business),
            (criterion(2, 1, "Financial Terms", "revenue|profit", 0.70), business),
            (criterion(3, 2, "Legal Keywords", "contract", 0.90), legal),
        ]
        document = SimpleNamespace(id=5, content="Business revenue summary")
        repository = InMemoryRepository(documents={5: document}, rows=rows)

        outcome = DocumentClassificationService(repository).classify_document(5)

        assert len(repository.persisted) == 1
        assert outcome.document is document
        assert outcome.category is business
        assert outcome.result.confidence_level == ConfidenceLevel.MEDIUM
        assert outcome.result.confidence_score == pytest.approx(0.5)
        assert outcome.result.matched_criteria == ["Business Keywords", "Financial Terms"]
        assert [c.id for c in outcome.matched_criteria_details] == [1, 2]

    def test_criteria_are_read_fresh_on_every_call(self):
        business = category(1, "Business")
        repository = InMemoryRepository(
            documents={1: SimpleNamespace(id=1, content="business")},
            rows=[(criterion(1, 1, "Business Keywords", "business", 0.8), business)],
        )
        service = DocumentClassificationService(repository)

        service.classify_document(1)
        service.classify_document(1)

        assert repository.criteria_fetches == 2
        assert len(repository.persisted) == 2


class TestDocumentClassificationServiceWithDatabase:
    """Orchestration against the SQLAlchemy repository."""

    def test_classify_business_document(self, db_session, catalog, make_document, sample_texts):
        document = make_document(sample_texts["business"], filename="business_plan.pdf", file_size=2048)

        outcome = DocumentClassificationService.from_session(db_session).classify_document(document.id)

        assert outcome.category.name == "Business Documents"
        assert outcome.category.color == "#3B82F6"
        assert outcome.result.id is not None
        assert outcome.result.classified_at is not None
        assert outcome.result.confidence_level == ConfidenceLevel.MEDIUM
        assert outcome.result.confidence_score == pytest.approx(0.5)
        assert outcome.result.matched_criteria == ["Business Keywords", "Financial Terms"]
        assert [c.name for c in outcome.matched_criteria_details] == ["Business Keywords", "Financial Terms"]
        assert all(c.category_id == catalog["business"].id for c in outcome.matched_criteria_details)

    def test_classify_legal_document(self, db_session, catalog, make_document, sample_texts):
        document = make_document(sample_texts["legal"])

        outcome = DocumentClassificationService.from_session(db_session).classify_document(document.id)

        assert outcome.category.name == "Legal Documents"
        assert outcome.result.confidence_level == ConfidenceLevel.MEDIUM
        assert outcome.result.matched_criteria == ["Legal Keywords", "Legal Entities"]

    def test_classify_technical_document(self, db_session, catalog, make_document, sample_texts):
        document = make_document(sample_texts["technical"])

        outcome = DocumentClassificationService.from_session(db_session).classify_document(document.id)

        assert outcome.category.name == "Technical Documents"
        assert outcome.result.confidence_level == ConfidenceLevel.LOW
        assert outcome.result.confidence_score == pytest.approx(0.283)

    def test_result_is_stored(self, db_session, catalog, make_document, sample_texts):
        document = make_document(sample_texts["business"])

        outcome = DocumentClassificationService.from_session(db_session).classify_document(document.id)

        stored = db_session.query(models.ClassificationResult).filter_by(id=outcome.result.id).one()
        assert stored.document_id == document.id
        assert stored.category_id == catalog["business"].id
        assert stored.classification_method == "Pattern Matching"
        assert stored.matched_criteria == ["Business Keywords", "Financial Terms"]

    def test_reclassification_appends_history(self, db_session, catalog, make_document, sample_texts):
        document = make_document(sample_texts["legal"])
        service = DocumentClassificationService.from_session(db_session)

        first = service.classify_document(document.id)
        second = service.classify_document(document.id)

        assert first.result.id != second.result.id
        assert db_session.query(models.ClassificationResult).filter_by(document_id=document.id).count() == 2

    def test_document_and_catalog_are_not_mutated(self, db_session, catalog, make_document, sample_texts):
        document = make_document(sample_texts["business"])
        criteria_before = [(c.id, c.name, c.pattern, c.weight) for c in db_session.query(models.Criterion).all()]

        DocumentClassificationService.from_session(db_session).classify_document(document.id)

        db_session.refresh(document)
        assert document.content == sample_texts["business"]
        criteria_after = [(c.id, c.name, c.pattern, c.weight) for c in db_session.query(models.Criterion).all()]
        assert criteria_before == criteria_after

    def test_invalid_regex_pattern_matches_literally(self, db_session, catalog, make_document):
        db_session.add(models.Criterion(
            category_id=catalog["business"].id, name="Invalid Regex",
            pattern="[unclosed bracket", weight=0.50,
        ))
        db_session.commit()
        document = make_document("This document contains [unclosed bracket text for testing.")

        outcome = DocumentClassificationService.from_session(db_session).classify_document(document.id)

        assert outcome.category.name == "Business Documents"
        assert "Invalid Regex" in outcome.result.matched_criteria

    def test_tie_goes_to_lower_category_id(self, db_session, make_document):
        first = models.Category(name="First", color="#111111")
        second = models.Category(name="Second", color="#222222")
        db_session.add_all([first, second])
        db_session.commit()
        # Insert the second category's criterion first; index order is by category id
        db_session.add(models.Criterion(category_id=second.id, name="Second Rule", pattern="shared", weight=0.5))
        db_session.add(models.Criterion(category_id=first.id, name="First Rule", pattern="shared", weight=0.5))
        db_session.commit()
        document = make_document("a shared keyword")

        outcome = DocumentClassificationService.from_session(db_session).classify_document(document.id)

        assert outcome.category.id == first.id
        assert outcome.result.matched_criteria == ["First Rule"]

    def test_no_criteria_in_database(self, db_session, make_document):
        document = make_document("This document has no classification criteria available.")

        with pytest.raises(NoCriteriaError):
            DocumentClassificationService.from_session(db_session).classify_document(document.id)


class TestClassificationRepository:

    def test_persist_rolls_back_on_failure(self):
        db = Mock()
        db.commit.side_effect = RuntimeError("database is locked")
        repository = ClassificationRepository(db)

        with pytest.raises(RuntimeError):
            repository.persist_classification_result(models.ClassificationResult(document_id=1))

        db.rollback.assert_called_once()
