# Re-export database dependency
from .db import get_db

__all__ = ["get_db"]
