"""Tests for the starter catalog seed script."""
from docclass import models
from scripts.seed_criteria import STARTER_CATALOG, seed_catalog


def test_seed_catalog_creates_categories_and_criteria(db_session):
    created = seed_catalog(db_session)

    assert created == len(STARTER_CATALOG)
    names = [c.name for c in db_session.query(models.Category).order_by(models.Category.id)]
    assert names == ["Business Documents", "Legal Documents", "Technical Documents"]
    expected_criteria = sum(len(entry["criteria"]) for entry in STARTER_CATALOG)
    assert db_session.query(models.Criterion).count() == expected_criteria


def test_seed_catalog_is_idempotent(db_session):
    seed_catalog(db_session)

    assert seed_catalog(db_session) == 0
    assert db_session.query(models.Category).count() == len(STARTER_CATALOG)


def test_seed_catalog_skips_existing_category(db_session):
    db_session.add(models.Category(name="Legal Documents", color="#000000"))
    db_session.commit()

    assert seed_catalog(db_session) == len(STARTER_CATALOG) - 1
    legal = db_session.query(models.Category).filter_by(name="Legal Documents").one()
    assert legal.criteria == []


def test_seeded_catalog_classifies_documents(client, db_session):
    seed_catalog(db_session)
    document = client.post("/documents", json={
        "filename": "api.txt",
        "file_type": "txt",
        "file_size": 64,
        "content": "Software architecture for the API server and database",
    }).json()

    response = client.post(f"/documents/{document['id']}/classify")

    assert response.status_code == 200
    assert response.json()["category"]["name"] == "Technical Documents"
    assert response.json()["result"]["confidence_level"] == "medium"
