"""Apply a change set to the catalog.

Writes happen in dependency order. A new child is always created with its
parent reference already set and the parent's child list is updated after,
so the catalog never holds a dangling reference.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.domain.errors import IncompleteChangeSetError
from nihmsync.domain.reconciliation.contracts import LoadResult

if TYPE_CHECKING:
    from nihmsync.domain.model import CatalogEntity, Grant, Submission
    from nihmsync.domain.reconciliation.catalog import CatalogClient
    from nihmsync.domain.reconciliation.contracts import ChangeSet

log = getLogger(__name__)


class SubmissionLoader:
    def __init__(self, catalog: CatalogClient) -> None:
        self._catalog = catalog

    def load(self, change_set: ChangeSet | None) -> LoadResult:
        if change_set is None or change_set.submission is None:
            raise IncompleteChangeSetError("A null Submission object was passed to the loader.")
        if change_set.publication is None:
            raise IncompleteChangeSetError("A Submission was passed to the loader without a Publication.")
        grant = change_set.grant
        if grant is None or grant.id is None:
            raise IncompleteChangeSetError(
                "No Grant URI was provided for the Submission with PMID: "
                f"{change_set.publication.pmid}."
            )

        created: list[str] = []
        updated: list[str] = []

        publication = self._save(change_set.publication, created, updated)

        repository_copy = change_set.repository_copy
        if repository_copy is not None:
            if repository_copy.publication is None:
                repository_copy = replace(repository_copy, publication=publication.id)
            repository_copy = self._save(repository_copy, created, updated)

        submission = change_set.submission
        if submission.publication is None:
            submission = replace(submission, publication=publication.id)
        if submission.id is None:
            submission = self._save(submission, created, updated)
            update_submission = False
        else:
            update_submission = True

        self._link_grant(grant, submission, updated)

        deposit = change_set.deposit
        if deposit is not None:
            deposit = replace(
                deposit,
                submission=deposit.submission or submission.id,
                repository_copy=deposit.repository_copy
                or (repository_copy.id if repository_copy is not None else None),
            )
            is_new_deposit = deposit.id is None
            deposit = self._save(deposit, created, updated)
            if is_new_deposit and deposit.id not in submission.deposits:
                submission = replace(submission, deposits=[*submission.deposits, deposit.id])
                update_submission = True

        if (
            update_submission
            and self._catalog.update_if_changed(submission)
            and submission.id not in created
        ):
            _note(submission, updated)

        log.debug(
            "Loaded record for pmid %s: %d created, %d updated",
            publication.pmid,
            len(created),
            len(updated),
        )
        return LoadResult(
            publication=publication,
            submission=submission,
            repository_copy=repository_copy,
            deposit=deposit,
            created=created,
            updated=updated,
        )

    def _save[TEntity: CatalogEntity](
        self,
        entity: TEntity,
        created: list[str],
        updated: list[str],
    ) -> TEntity:
        if entity.id is None:
            entity = replace(entity, id=self._catalog.create(entity))
            _note(entity, created)
        elif self._catalog.update_if_changed(entity):
            _note(entity, updated)
        return entity

    def _link_grant(self, grant: Grant, submission: Submission, updated: list[str]) -> None:
        if submission.id is None or submission.id in grant.submissions:
            return
        grant = replace(grant, submissions=[*grant.submissions, submission.id])
        if self._catalog.update_if_changed(grant):
            _note(grant, updated)


def _note(entity: CatalogEntity, refs: list[str]) -> None:
    if entity.id is not None and entity.id not in refs:
        refs.append(entity.id)
