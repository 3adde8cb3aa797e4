"""Public domain model surface."""

from __future__ import annotations

from nihmsync.domain.model.entities import (
    CLASS_BY_ENTITY_KIND,
    CatalogEntity,
    Deposit,
    EntityRef,
    Grant,
    Journal,
    Publication,
    RepositoryCopy,
    Submission,
)
from nihmsync.domain.model.enums import (
    AggregatedDepositStatus,
    ComplianceStatus,
    CopyStatus,
    DepositStatus,
    EntityKind,
    SubmissionSource,
)
from nihmsync.domain.model.record import NihmsPublication

__all__ = [  # noqa: RUF022
    # entities
    "CLASS_BY_ENTITY_KIND",
    "CatalogEntity",
    "EntityRef",
    "Grant",
    "Journal",
    "Publication",
    "Submission",
    "RepositoryCopy",
    "Deposit",
    # source record
    "NihmsPublication",
    # enums
    "AggregatedDepositStatus",
    "ComplianceStatus",
    "CopyStatus",
    "DepositStatus",
    "EntityKind",
    "SubmissionSource",
]
