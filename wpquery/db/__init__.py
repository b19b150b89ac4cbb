# File: wpquery/db/__init__.py | Version: 1.1 | Path: /wpquery/db/__init__.py
# Re-export commonly used items so tests can do: from wpquery.db import Base, get_db
# Import models so Base.metadata knows every table before create_all()
import wpquery.models  # noqa: F401

from .base_class import Base
from .session import SessionLocal, engine, get_db

__all__ = ["Base", "get_db", "SessionLocal", "engine"]
