"""Catalog entities.

Entities are value records: two instances are equal when every field matches.
The loader relies on this to skip writes when a freshly built entity is
identical to the one last read from the catalog.

``id`` is the opaque catalog reference. ``None`` means the entity has been
built in memory but not yet created.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from nihmsync.domain.model.enums import EntityKind, SubmissionSource

if TYPE_CHECKING:
    from datetime import date

    from nihmsync.domain.model.enums import AggregatedDepositStatus, CopyStatus, DepositStatus

type EntityRef = str


@dataclass(kw_only=True)
class CatalogEntity:
    id: EntityRef | None = None

    # class-level discriminator; subclasses must override
    ENTITY_KIND: ClassVar[EntityKind]

    @property
    def entity_kind(self) -> EntityKind:
        return self.ENTITY_KIND

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(kw_only=True)
class Grant(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.GRANT

    award_number: str
    pi: EntityRef | None = None
    submissions: list[EntityRef] = field(default_factory=list["EntityRef"])


@dataclass(kw_only=True)
class Journal(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.JOURNAL

    journal_name: str | None = None
    issn: str | None = None
    essn: str | None = None


@dataclass(kw_only=True)
class Publication(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.PUBLICATION

    pmid: str | None = None
    doi: str | None = None
    title: str | None = None
    journal: EntityRef | None = None
    volume: str | None = None
    issue: str | None = None


@dataclass(kw_only=True)
class Submission(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.SUBMISSION

    publication: EntityRef | None = None
    user: EntityRef | None = None
    repositories: list[EntityRef] = field(default_factory=list["EntityRef"])
    grants: list[EntityRef] = field(default_factory=list["EntityRef"])
    deposits: list[EntityRef] = field(default_factory=list["EntityRef"])
    submitted: bool = False
    source: SubmissionSource = SubmissionSource.PASS
    submitted_date: date | None = None
    aggregated_deposit_status: AggregatedDepositStatus | None = None


@dataclass(kw_only=True)
class RepositoryCopy(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.REPOSITORY_COPY

    publication: EntityRef | None = None
    repository: EntityRef | None = None
    external_ids: list[str] = field(default_factory=list[str])
    access_url: str | None = None
    copy_status: CopyStatus | None = None


@dataclass(kw_only=True)
class Deposit(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.DEPOSIT

    submission: EntityRef | None = None
    repository: EntityRef | None = None
    repository_copy: EntityRef | None = None
    deposit_status: DepositStatus | None = None
    assigned_id: str | None = None
    access_url: str | None = None
    requested: bool = False
    user_action_required: bool = False


CLASS_BY_ENTITY_KIND: dict[EntityKind, type[CatalogEntity]] = {
    cls.ENTITY_KIND: cls for cls in (Grant, Journal, Publication, Submission, RepositoryCopy, Deposit)
}
