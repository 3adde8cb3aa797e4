"""Typed, logged access to the catalog repository.

The repository port speaks in references; this wrapper adds the read-or-fail
and diff-before-write behaviour the matcher and loader share.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.domain.errors import ReconciliationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from nihmsync.domain.model import CatalogEntity, EntityRef
    from nihmsync.domain.ports.persistence import CatalogRepository

log = getLogger(__name__)


class CatalogClient:
    def __init__(self, repository: CatalogRepository) -> None:
        self._repository = repository

    def find_by_attribute(
        self,
        kind: type[CatalogEntity],
        field: str,
        value: object,
    ) -> EntityRef | None:
        return self._repository.find_by_attribute(kind, field, value)

    def find_all_by_attributes(
        self,
        kind: type[CatalogEntity],
        attributes: Mapping[str, object],
    ) -> tuple[EntityRef, ...]:
        return self._repository.find_all_by_attributes(kind, attributes)

    def read[TEntity: CatalogEntity](self, ref: EntityRef, kind: type[TEntity]) -> TEntity:
        """Read an entity the catalog has just pointed us at; absence is an error."""

        entity = self._repository.read(ref, kind)
        if entity is None:
            raise ReconciliationError(
                f"{kind.ENTITY_KIND} {ref} was referenced by the catalog but could not be read"
            )
        return entity

    def create(self, entity: CatalogEntity) -> EntityRef:
        if entity.id is not None:
            raise ValueError(f"{entity.entity_kind} {entity.id} already exists in the catalog")
        ref = self._repository.create(entity)
        log.info("New %s created with reference %s", entity.entity_kind, ref)
        return ref

    def update_if_changed(self, entity: CatalogEntity) -> bool:
        """Write ``entity`` only when it differs from the stored version.

        Returns whether an update was issued.
        """

        if entity.id is None:
            raise ValueError(f"Cannot update a {entity.entity_kind} that has not been created")
        original = self.read(entity.id, type(entity))
        if original == entity:
            log.debug("%s %s unchanged, skipping update", entity.entity_kind, entity.id)
            return False
        self._repository.update(entity)
        log.info("%s with reference %s was updated", entity.entity_kind, entity.id)
        return True
