"""Catalog repository backed by a SQLAlchemy session."""

from __future__ import annotations

import uuid
from dataclasses import fields
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update

from nihmsync.adapters.sqlalchemy.tables import TABLE_BY_CLASS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Row, Table
    from sqlalchemy.orm import Session

    from nihmsync.domain.model import CatalogEntity, EntityRef


def new_ref(entity: CatalogEntity) -> EntityRef:
    return f"{entity.entity_kind}:{uuid.uuid4()}"


class SqlAlchemyCatalogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

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
        table = _table_for(kind)
        stmt = select(table.c.ref).order_by(table.c.pk)
        for name, value in attributes.items():
            column = _column(table, name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        return tuple(self.session.execute(stmt).scalars())

    def create(self, entity: CatalogEntity) -> EntityRef:
        table = _table_for(type(entity))
        ref = new_ref(entity)
        self.session.execute(insert(table).values(ref=ref, **_values(entity)))
        return ref

    def read[TEntity: CatalogEntity](self, ref: EntityRef, kind: type[TEntity]) -> TEntity | None:
        table = _table_for(kind)
        row = self.session.execute(select(table).where(table.c.ref == ref)).one_or_none()
        if row is None:
            return None
        return _entity_from_row(kind, row)

    def update(self, entity: CatalogEntity) -> None:
        if entity.id is None:
            raise ValueError(f"Cannot update a {entity.entity_kind} without a reference")
        table = _table_for(type(entity))
        result = self.session.execute(
            update(table).where(table.c.ref == entity.id).values(**_values(entity))
        )
        if result.rowcount == 0:
            raise LookupError(f"{entity.entity_kind} {entity.id} does not exist")


def _table_for(kind: type[CatalogEntity]) -> Table:
    try:
        return TABLE_BY_CLASS[kind]
    except KeyError:
        raise ValueError(f"Unsupported catalog entity type: {kind.__name__}") from None


def _column(table: Table, name: str) -> Any:
    if name in {"pk", "ref"} or name not in table.c:
        raise ValueError(f"Unknown attribute {name!r} for {table.name}")
    return table.c[name]


def _values(entity: CatalogEntity) -> dict[str, object]:
    return {f.name: getattr(entity, f.name) for f in fields(entity) if f.name != "id"}


def _entity_from_row[TEntity: CatalogEntity](kind: type[TEntity], row: Row[Any]) -> TEntity:
    mapping = row._mapping  # noqa: SLF001
    values = {f.name: mapping[f.name] for f in fields(kind) if f.name != "id"}
    return kind(id=mapping["ref"], **values)
