"""In-process catalog used for dry runs and tests."""

from __future__ import annotations

import copy
import uuid
from dataclasses import fields, replace
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from nihmsync.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from nihmsync.domain.model import CatalogEntity, EntityRef

log = getLogger(__name__)


class InMemoryCatalogRepository:
    """Dictionary-backed catalog.

    Entities are copied on the way in and on the way out, so callers can
    never change stored state without calling :meth:`update`.
    """

    def __init__(self) -> None:
        self._entities: dict[EntityRef, CatalogEntity] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def add(self, entity: CatalogEntity) -> EntityRef:
        """Seed an entity, keeping its ``id`` when one is set."""

        ref = entity.id or _new_ref(entity)
        self._entities[ref] = replace(copy.deepcopy(entity), id=ref)
        return ref

    def find_by_attribute(
        self,
        kind: type[CatalogEntity],
        field: str,
        value: object,
    ) -> EntityRef | None:
        refs = self.find_all_by_attributes(kind, {field: value})
        return refs[0] if refs else None

    def find_all_by_attributes(
        self,
        kind: type[CatalogEntity],
        attributes: Mapping[str, object],
    ) -> tuple[EntityRef, ...]:
        known = {f.name for f in fields(kind)}
        unknown = set(attributes).difference(known)
        if unknown:
            raise ValueError(f"Unknown attribute(s) for {kind.__name__}: {', '.join(sorted(unknown))}")
        return tuple(
            ref
            for ref, entity in self._entities.items()
            if type(entity) is kind
            and all(getattr(entity, name) == value for name, value in attributes.items())
        )

    def create(self, entity: CatalogEntity) -> EntityRef:
        if entity.id is not None:
            raise ValueError(f"{entity.entity_kind} {entity.id} already has a reference")
        return self.add(entity)

    def read[TEntity: CatalogEntity](self, ref: EntityRef, kind: type[TEntity]) -> TEntity | None:
        entity = self._entities.get(ref)
        if entity is None or not isinstance(entity, kind):
            return None
        return copy.deepcopy(entity)

    def update(self, entity: CatalogEntity) -> None:
        if entity.id is None or entity.id not in self._entities:
            raise LookupError(f"{entity.entity_kind} {entity.id} does not exist")
        self._entities[entity.id] = copy.deepcopy(entity)

    def snapshot(self) -> dict[EntityRef, CatalogEntity]:
        return copy.deepcopy(self._entities)

    def restore(self, snapshot: Mapping[EntityRef, CatalogEntity]) -> None:
        self._entities = copy.deepcopy(dict(snapshot))


class InMemoryUnitOfWork:
    """Unit of work over an :class:`InMemoryCatalogRepository`.

    Changes not committed when the block exits are discarded.
    """

    def __init__(self, repository: InMemoryCatalogRepository | None = None) -> None:
        self.repository = repository if repository is not None else InMemoryCatalogRepository()
        self._repositories = CatalogRepositories(catalog=self.repository)
        self._snapshot: dict[EntityRef, CatalogEntity] | None = None
        self.commits = 0

    @property
    def repositories(self) -> CatalogRepositories:
        return self._repositories

    def __enter__(self) -> InMemoryUnitOfWork:
        self._snapshot = self.repository.snapshot()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self.rollback()
        self._snapshot = None
        return False

    def commit(self) -> None:
        self._snapshot = self.repository.snapshot()
        self.commits += 1

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        self.repository.restore(self._snapshot)
        log.debug("Rolled back in-memory catalog to last commit")


def _new_ref(entity: CatalogEntity) -> EntityRef:
    return f"{entity.entity_kind}:{uuid.uuid4()}"


if TYPE_CHECKING:
    from nihmsync.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = InMemoryUnitOfWork()
