"""Values passed between the transformer, the loader and their callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nihmsync.domain.model import (
        Deposit,
        EntityRef,
        Grant,
        Publication,
        RepositoryCopy,
        Submission,
    )


@dataclass(slots=True, kw_only=True)
class ChangeSet:
    """Entities built or updated for one record, not yet written.

    Entities with ``id`` set already exist in the catalog; the rest still
    need creating. The grant is always an existing one.
    """

    grant: Grant | None
    publication: Publication | None
    submission: Submission | None
    repository_copy: RepositoryCopy | None = None
    deposit: Deposit | None = None


@dataclass(slots=True, kw_only=True)
class LoadResult:
    """Persisted state after a change set was applied."""

    publication: Publication
    submission: Submission
    repository_copy: RepositoryCopy | None = None
    deposit: Deposit | None = None
    created: list[EntityRef] = field(default_factory=list["EntityRef"])
    updated: list[EntityRef] = field(default_factory=list["EntityRef"])

    @property
    def changed(self) -> bool:
        return bool(self.created or self.updated)
