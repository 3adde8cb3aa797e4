"""SQLAlchemy adapter package for the catalog."""

from __future__ import annotations

from .repositories import SqlAlchemyCatalogRepository
from .tables import TABLE_BY_CLASS, create_all_tables, metadata
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "TABLE_BY_CLASS",
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
