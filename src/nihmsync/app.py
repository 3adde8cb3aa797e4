"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.adapters.entrez import EntrezMetadataResolver
from nihmsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from nihmsync.config import get_entrez_config, get_loader_config
from nihmsync.domain.ports.unit_of_work import CatalogUnitOfWork
from nihmsync.domain.reconciliation import ReconciliationEngine, reconcile_records

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nihmsync.config import LoaderConfig
    from nihmsync.domain.model import NihmsPublication
    from nihmsync.domain.ports import MetadataResolver
    from nihmsync.domain.reconciliation import ReconcileSummary

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = getLogger(__name__)


def build_engine(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    metadata_resolver: MetadataResolver | None = None,
    config: LoaderConfig | None = None,
    use_metadata: bool = True,
    dry_run: bool = False,
) -> ReconciliationEngine:
    """Wire the reconciliation engine to the configured adapters."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyUnitOfWork
    if metadata_resolver is None and use_metadata:
        metadata_resolver = EntrezMetadataResolver(config=get_entrez_config())
    return ReconciliationEngine(
        unit_of_work_factory=unit_of_work_factory,
        metadata_resolver=metadata_resolver,
        config=config or get_loader_config(),
        dry_run=dry_run,
    )


def reconcile_nihms_records(
    records: Iterable[NihmsPublication],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    metadata_resolver: MetadataResolver | None = None,
    config: LoaderConfig | None = None,
    use_metadata: bool = True,
    dry_run: bool = False,
) -> ReconcileSummary:
    """Reconcile NIHMS records against the catalog using the configured adapters."""

    entrez_resolver: EntrezMetadataResolver | None = None
    if metadata_resolver is None and use_metadata:
        entrez_resolver = EntrezMetadataResolver(config=get_entrez_config())
        metadata_resolver = entrez_resolver

    engine = build_engine(
        unit_of_work_factory=unit_of_work_factory,
        metadata_resolver=metadata_resolver,
        config=config,
        use_metadata=use_metadata,
        dry_run=dry_run,
    )
    log.info(
        "Starting NIHMS reconciliation: repository=%s, metadata=%s, dry_run=%s",
        engine.config.repository_uri,
        engine.metadata_resolver is not None,
        dry_run,
    )
    try:
        return reconcile_records(records, engine=engine)
    finally:
        if entrez_resolver is not None:
            entrez_resolver.close()
