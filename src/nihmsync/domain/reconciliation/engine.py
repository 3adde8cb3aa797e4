"""Run transform and load for records, one unit of work per record."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.domain.reconciliation.catalog import CatalogClient
from nihmsync.domain.reconciliation.load import SubmissionLoader
from nihmsync.domain.reconciliation.match import CatalogMatcher
from nihmsync.domain.reconciliation.status import calc_aggregated_deposit_status
from nihmsync.domain.reconciliation.transform import SubmissionTransformer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from nihmsync.config import LoaderConfig
    from nihmsync.domain.model import NihmsPublication
    from nihmsync.domain.ports import CatalogUnitOfWork, MetadataResolver
    from nihmsync.domain.reconciliation.contracts import LoadResult
    from nihmsync.domain.reconciliation.status import AggregateStatusRule

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    unit_of_work_factory: Callable[[], CatalogUnitOfWork]
    metadata_resolver: MetadataResolver | None
    config: LoaderConfig
    aggregate_rule: AggregateStatusRule = calc_aggregated_deposit_status
    dry_run: bool = False

    def reconcile(self, record: NihmsPublication) -> LoadResult:
        """Transform and load one record; nothing is kept if either step fails."""

        with self.unit_of_work_factory() as uow:
            catalog = CatalogClient(uow.repositories.catalog)
            transformer = SubmissionTransformer(
                matcher=CatalogMatcher(catalog),
                metadata_resolver=self.metadata_resolver,
                config=self.config,
                aggregate_rule=self.aggregate_rule,
            )
            change_set = transformer.transform(record)
            result = SubmissionLoader(catalog).load(change_set)
            if self.dry_run:
                log.info("Dry run, discarding changes for pmid %s", record.pmid)
                uow.rollback()
            else:
                uow.commit()
        return result


@dataclass(slots=True, frozen=True)
class RecordFailure:
    pmid: str
    grant_number: str
    error: str


@dataclass(slots=True)
class ReconcileSummary:
    processed: int = 0
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    failures: list[RecordFailure] = field(default_factory=list[RecordFailure])

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def succeeded(self) -> int:
        return self.processed - self.failed


def reconcile_records(
    records: Iterable[NihmsPublication],
    *,
    engine: ReconciliationEngine,
) -> ReconcileSummary:
    """Reconcile each record in turn; a failing record never stops the run."""

    summary = ReconcileSummary()
    for record in records:
        summary.processed += 1
        try:
            result = engine.reconcile(record)
        except Exception as exc:  # noqa: BLE001
            log.exception(
                "Error during transform and load of record with pmid %s, grant %s",
                record.pmid,
                record.grant_number,
            )
            summary.failures.append(
                RecordFailure(pmid=record.pmid, grant_number=record.grant_number, error=str(exc))
            )
            continue
        if result.created:
            summary.created += 1
        elif result.updated:
            summary.updated += 1
        else:
            summary.unchanged += 1

    log.info(
        "Reconciled %d record(s): %d created, %d updated, %d unchanged, %d failed",
        summary.processed,
        summary.created,
        summary.updated,
        summary.unchanged,
        summary.failed,
    )
    return summary
