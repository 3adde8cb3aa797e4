"""Ports for reading and writing catalog entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from nihmsync.domain.model import CatalogEntity, EntityRef


@runtime_checkable
class CatalogRepository(Protocol):
    """Minimal store contract for the research-information catalog.

    ``kind`` is always the entity class. Attribute names are entity field names.
    """

    def find_by_attribute(
        self,
        kind: type[CatalogEntity],
        field: str,
        value: object,
    ) -> EntityRef | None: ...

    def find_all_by_attributes(
        self,
        kind: type[CatalogEntity],
        attributes: Mapping[str, object],
    ) -> tuple[EntityRef, ...]:
        """Return every match in creation order, each reference once."""
        ...

    def create(self, entity: CatalogEntity) -> EntityRef: ...

    def read[TEntity: CatalogEntity](self, ref: EntityRef, kind: type[TEntity]) -> TEntity | None: ...

    def update(self, entity: CatalogEntity) -> None: ...
