"""SQLAlchemy table metadata for the catalog."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Dialect,
    Enum,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

from nihmsync.domain.model import (
    AggregatedDepositStatus,
    CatalogEntity,
    CopyStatus,
    Deposit,
    DepositStatus,
    Grant,
    Journal,
    Publication,
    RepositoryCopy,
    Submission,
    SubmissionSource,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class StringListType(TypeDecorator[list[str]]):
    """Ordered list of strings stored as a JSON array."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps(list(value or []))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        if value is None:
            return []
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return []
        return [item for item in cast(list[Any], loaded) if isinstance(item, str)]


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


def _entity_columns() -> tuple[Column[Any], ...]:
    # ``pk`` orders rows by creation; ``ref`` is the catalog reference.
    return (
        Column("pk", Integer, primary_key=True, autoincrement=True),
        Column("ref", String, nullable=False, unique=True),
    )


grant_table = Table(
    "grant",
    metadata,
    *_entity_columns(),
    Column("award_number", String, nullable=False, index=True),
    Column("pi", String, nullable=True),
    Column("submissions", StringListType, nullable=False),
)

journal_table = Table(
    "journal",
    metadata,
    *_entity_columns(),
    Column("journal_name", String, nullable=True),
    Column("issn", String, nullable=True, index=True),
    Column("essn", String, nullable=True, index=True),
)

publication_table = Table(
    "publication",
    metadata,
    *_entity_columns(),
    Column("pmid", String, nullable=True, index=True),
    Column("doi", String, nullable=True, index=True),
    Column("title", String, nullable=True),
    Column("journal", String, nullable=True),
    Column("volume", String, nullable=True),
    Column("issue", String, nullable=True),
)

submission_table = Table(
    "submission",
    metadata,
    *_entity_columns(),
    Column("publication", String, nullable=True, index=True),
    Column("user", String, nullable=True),
    Column("repositories", StringListType, nullable=False),
    Column("grants", StringListType, nullable=False),
    Column("deposits", StringListType, nullable=False),
    Column("submitted", Boolean, nullable=False, default=False),
    Column("source", Enum(SubmissionSource, native_enum=False), nullable=False),
    Column("submitted_date", Date, nullable=True),
    Column(
        "aggregated_deposit_status",
        Enum(AggregatedDepositStatus, native_enum=False),
        nullable=True,
    ),
)

repository_copy_table = Table(
    "repository_copy",
    metadata,
    *_entity_columns(),
    Column("publication", String, nullable=True, index=True),
    Column("repository", String, nullable=True),
    Column("external_ids", StringListType, nullable=False),
    Column("access_url", String, nullable=True),
    Column("copy_status", Enum(CopyStatus, native_enum=False), nullable=True),
)

deposit_table = Table(
    "deposit",
    metadata,
    *_entity_columns(),
    Column("submission", String, nullable=True, index=True),
    Column("repository", String, nullable=True),
    Column("repository_copy", String, nullable=True),
    Column("deposit_status", Enum(DepositStatus, native_enum=False), nullable=True),
    Column("assigned_id", String, nullable=True),
    Column("access_url", String, nullable=True),
    Column("requested", Boolean, nullable=False, default=False),
    Column("user_action_required", Boolean, nullable=False, default=False),
)

TABLE_BY_CLASS: Final[dict[type[CatalogEntity], Table]] = {
    Grant: grant_table,
    Journal: journal_table,
    Publication: publication_table,
    Submission: submission_table,
    RepositoryCopy: repository_copy_table,
    Deposit: deposit_table,
}


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
