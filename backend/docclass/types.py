from sqlalchemy.types import TypeDecorator, JSON as SAJSON
from sqlalchemy.dialects.postgresql import JSONB

class JSONBCompat(TypeDecorator):
    """
    Stores JSON documents (e.g. matched criteria name lists) as PostgreSQL JSONB,
    and as generic JSON on other databases such as the SQLite used in tests.
    """
    impl = SAJSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(SAJSON())
