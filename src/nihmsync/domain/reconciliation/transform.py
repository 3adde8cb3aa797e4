"""Turn one NIHMS record into a change set against the catalog."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.domain.errors import ReconciliationError
from nihmsync.domain.reconciliation import build
from nihmsync.domain.reconciliation.contracts import ChangeSet
from nihmsync.domain.reconciliation.match import resolve_deposit_for_repository
from nihmsync.domain.reconciliation.status import (
    calc_aggregated_deposit_status,
    needs_deposit,
)

if TYPE_CHECKING:
    from nihmsync.config import LoaderConfig
    from nihmsync.domain.model import (
        CatalogEntity,
        Deposit,
        EntityRef,
        Grant,
        NihmsPublication,
        Publication,
        RepositoryCopy,
        Submission,
    )
    from nihmsync.domain.ports import MetadataResolver
    from nihmsync.domain.reconciliation.match import CatalogMatcher
    from nihmsync.domain.reconciliation.status import AggregateStatusRule

log = getLogger(__name__)


class SubmissionTransformer:
    """Build the publication, copy, submission and deposit for a record.

    Nothing is written here. Existing entities are read through the matcher
    and new versions derived from them; the loader decides what to persist.
    """

    def __init__(
        self,
        *,
        matcher: CatalogMatcher,
        metadata_resolver: MetadataResolver | None,
        config: LoaderConfig,
        aggregate_rule: AggregateStatusRule = calc_aggregated_deposit_status,
    ) -> None:
        self._matcher = matcher
        self._metadata = metadata_resolver
        self._config = config
        self._aggregate_rule = aggregate_rule

    @property
    def repository(self) -> str:
        return self._config.repository_uri

    def transform(self, record: NihmsPublication) -> ChangeSet:
        grant = self._grant_for(record)
        access_url = build.build_access_url(self._config.pmc_url_template, record.pmc_id)

        publication = self._publication_for(record)
        repository_copy = self._repository_copy_for(record, publication, access_url)
        submission = self._submission_for(publication, grant)

        existing_deposits = (
            self._matcher.read_submission_deposits(submission) if submission.is_persisted else []
        )
        deposit = self._deposit_for(record, existing_deposits, repository_copy, access_url)

        submission = build.add_submission_repository(submission, self.repository)
        submission = build.update_submission_grants(submission, _ref(grant))
        if repository_copy is not None:
            submission = build.mark_submitted(submission, record)
        statuses = [d.deposit_status for d in _substitute(existing_deposits, deposit)]
        submission = build.with_aggregated_status(
            submission,
            self._aggregate_rule(statuses, missing_expected_deposits=False),
        )

        return ChangeSet(
            grant=grant,
            publication=publication,
            submission=submission,
            repository_copy=repository_copy,
            deposit=deposit,
        )

    def _grant_for(self, record: NihmsPublication) -> Grant:
        grant_ref = self._matcher.resolve_grant(record.grant_number, record.pmid)
        return self._matcher.read_grant(grant_ref)

    def _publication_for(self, record: NihmsPublication) -> Publication:
        metadata = self._metadata.lookup(record.pmid) if self._metadata is not None else None
        doi = metadata.doi if metadata is not None else None

        publication = self._matcher.resolve_publication(record.pmid, doi)
        if publication is not None:
            return build.update_publication(publication, pmid=record.pmid, doi=doi)

        journal = None
        if metadata is not None:
            journal = self._matcher.resolve_journal(metadata.issn, metadata.essn)
            if journal is None:
                log.info("No Journal found for pmid %s, publication will have none", record.pmid)
        return build.new_publication(record.pmid, metadata, journal)

    def _repository_copy_for(
        self,
        record: NihmsPublication,
        publication: Publication,
        access_url: str | None,
    ) -> RepositoryCopy | None:
        if publication.is_persisted:
            existing = self._matcher.resolve_repository_copy(self.repository, _ref(publication))
            if existing is not None:
                return build.update_repository_copy(existing, record, access_url=access_url)
        if not (record.pmc_id or record.nihms_id):
            return None
        return build.new_repository_copy(
            record,
            publication=publication.id,
            repository=self.repository,
            access_url=access_url,
        )

    def _submission_for(self, publication: Publication, grant: Grant) -> Submission:
        if grant.pi is None:
            raise ReconciliationError(
                f"Grant {grant.id} has no PI, cannot determine the submission owner"
            )
        if publication.is_persisted:
            submission = self._matcher.resolve_submission(
                _ref(publication), grant.pi, self.repository
            )
            if submission is not None:
                return submission
        return build.new_submission(
            publication=publication.id,
            grant=grant,
            repository=self.repository,
        )

    def _deposit_for(
        self,
        record: NihmsPublication,
        existing_deposits: list[Deposit],
        repository_copy: RepositoryCopy | None,
        access_url: str | None,
    ) -> Deposit | None:
        copy_ref = repository_copy.id if repository_copy is not None else None
        deposit = resolve_deposit_for_repository(existing_deposits, self.repository)
        if deposit is not None:
            return build.update_deposit(
                deposit, record, repository_copy=copy_ref, access_url=access_url
            )
        if not needs_deposit(record):
            return None
        return build.new_deposit(
            record,
            repository=self.repository,
            repository_copy=copy_ref,
            access_url=access_url,
        )


def _substitute(deposits: list[Deposit], deposit: Deposit | None) -> list[Deposit]:
    if deposit is None:
        return deposits
    if deposit.id is None:
        return [*deposits, deposit]
    return [deposit if existing.id == deposit.id else existing for existing in deposits]


def _ref(entity: CatalogEntity) -> EntityRef:
    if entity.id is None:
        raise ReconciliationError(f"{entity.entity_kind} has not been created in the catalog")
    return entity.id
