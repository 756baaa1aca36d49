# backend/tests/unit/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docclass.main import app
from docclass.db import Base, get_db
from docclass import models
from docclass.enums import FileType

# One in-memory DB shared across threads (TestClient) via StaticPool
engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enforce FKs in SQLite (off by default otherwise)
@event.listens_for(engine, "connect")
def _set_sqlite_pragma(dbapi_connection, _):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base.metadata.create_all(bind=engine)

@pytest.fixture
def connection():
    conn = engine.connect()
    tx = conn.begin()
    try:
        yield conn
    finally:
        tx.rollback()
        conn.close()

@pytest.fixture
def db_session(connection):
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def _override_get_db(db_session):
    def _get_db():
        yield db_session
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def catalog(db_session):
    """Business, Legal and Technical categories with keyword criteria"""
    business = models.Category(name="Business Documents", color="#3B82F6", description="Business related documents")
    legal = models.Category(name="Legal Documents", color="#EF4444", description="Legal contracts and agreements")
    technical = models.Category(name="Technical Documents", color="#10B981", description="Technical specifications and manuals")
    db_session.add_all([business, legal, technical])
    db_session.commit()

    db_session.add_all([
        models.Criterion(category_id=business.id, name="Business Keywords",
                         pattern="business|company|corporate|enterprise", weight=0.80),
        models.Criterion(category_id=business.id, name="Financial Terms",
                         pattern="revenue|profit|budget|financial", weight=0.70),
        models.Criterion(category_id=legal.id, name="Legal Keywords",
                         pattern="contract|agreement|legal|clause", weight=0.90),
        models.Criterion(category_id=legal.id, name="Legal Entities",
                         pattern="party|parties|defendant|plaintiff", weight=0.60),
        models.Criterion(category_id=technical.id, name="Technical Keywords",
                         pattern="technical|specification|manual|documentation", weight=0.85),
    ])
    db_session.commit()

    return {"business": business, "legal": legal, "technical": technical}


@pytest.fixture
def make_document(db_session):
    """Factory for stored documents"""
    def _make(content, filename="document.pdf", file_type=FileType.PDF, file_size=1024):
        document = models.Document(
            filename=filename,
            file_type=file_type,
            file_size=file_size,
            content=content,
        )
        db_session.add(document)
        db_session.commit()
        db_session.refresh(document)
        return document
    return _make


BUSINESS_TEXT = (
    "This is a comprehensive business plan for our company. It includes revenue "
    "projections and financial analysis for the corporate structure."
)
LEGAL_TEXT = (
    "This legal agreement between the parties outlines the contract terms and "
    "conditions. Both parties agree to the specified clauses."
)
TECHNICAL_TEXT = (
    "Technical specification document for the system. This manual provides "
    "detailed documentation for implementation."
)


@pytest.fixture
def sample_texts():
    return {"business": BUSINESS_TEXT, "legal": LEGAL_TEXT, "technical": TECHNICAL_TEXT}
