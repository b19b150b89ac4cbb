# File: /wpquery/routers/__init__.py | Version: 2.0 | Path: /wpquery/routers/__init__.py
"""
Router package exports.

Keeping these explicit helps static analyzers and avoids surprises
when importing submodules like: `from wpquery.routers import queries as queries_router`.
"""
from . import health, queries, work_packages

__all__ = ["health", "queries", "work_packages"]
