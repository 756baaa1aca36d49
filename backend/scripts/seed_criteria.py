# backend/scripts/seed_criteria.py
import logging

from docclass.db import SessionLocal, create_tables
from docclass.models import Category, Criterion

logger = logging.getLogger(__name__)

# ----------------------------
# Starter catalog
# ----------------------------
STARTER_CATALOG = [
    {
        "name": "Business Documents",
        "color": "#3B82F6",
        "description": "Business related documents",
        "criteria": [
            ("Business Keywords", "business|company|corporate|enterprise", 0.80),
            ("Financial Terms", "revenue|profit|budget|financial", 0.70),
        ],
    },
    {
        "name": "Legal Documents",
        "color": "#EF4444",
        "description": "Legal contracts and agreements",
        "criteria": [
            ("Legal Keywords", "contract|agreement|legal|clause", 0.90),
            ("Legal Parties", r"plaintiff|defendant|party|parties", 0.60),
        ],
    },
    {
        "name": "Technical Documents",
        "color": "#10B981",
        "description": "Technical specifications and manuals",
        "criteria": [
            ("Technical Terms", "specification|technical|system|architecture", 0.85),
            ("Software Terms", r"api|database|server|software", 0.75),
        ],
    },
]


def seed_catalog(db) -> int:
    """Insert starter categories and their criteria; categories that already exist by name are skipped."""
    existing = {c.name for c in db.query(Category).all()}
    created = 0
    for entry in STARTER_CATALOG:
        if entry["name"] in existing:
            continue
        category = Category(
            name=entry["name"],
            color=entry["color"],
            description=entry["description"],
        )
        db.add(category)
        db.flush()
        for name, pattern, weight in entry["criteria"]:
            db.add(Criterion(category_id=category.id, name=name, pattern=pattern, weight=weight))
        created += 1
    db.commit()
    return created


def main():
    logging.basicConfig(level=logging.INFO)
    create_tables()
    db = SessionLocal()
    try:
        created = seed_catalog(db)
        logger.info(f"Seeded {created} categories")
    finally:
        db.close()


if __name__ == "__main__":
    main()
