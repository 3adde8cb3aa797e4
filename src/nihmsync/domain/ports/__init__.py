"""Collaborator contracts consumed by the reconciliation core."""

from __future__ import annotations

from .metadata import MetadataResolver, PubMedRecord
from .persistence import CatalogRepository
from .unit_of_work import CatalogRepositories, CatalogUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "CatalogRepositories",
    "CatalogRepository",
    "CatalogUnitOfWork",
    "MetadataResolver",
    "PubMedRecord",
    "RepositoryCollection",
    "UnitOfWork",
]
