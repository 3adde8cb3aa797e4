"""Construct new catalog entities and derive updated ones.

Every function returns a fresh object. Inputs are never mutated, so the
loader can compare a derived entity against what it last read.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.domain.model import Deposit, Publication, RepositoryCopy, Submission, SubmissionSource
from nihmsync.domain.reconciliation.status import (
    calc_copy_status,
    calc_deposit_status,
    is_user_action_required,
)

if TYPE_CHECKING:
    from nihmsync.domain.model import (
        AggregatedDepositStatus,
        EntityRef,
        Grant,
        NihmsPublication,
    )
    from nihmsync.domain.ports import PubMedRecord

log = getLogger(__name__)


def build_access_url(template: str, pmc_id: str | None) -> str | None:
    if not pmc_id:
        return None
    return template.format(pmc_id=pmc_id)


# Publication ----------------------------------------------------------------


def new_publication(
    pmid: str,
    metadata: PubMedRecord | None,
    journal: EntityRef | None = None,
) -> Publication:
    if metadata is None:
        log.warning("No PubMed metadata found for pmid %s, creating a bare Publication", pmid)
        return Publication(pmid=pmid, journal=journal)
    return Publication(
        pmid=pmid,
        doi=metadata.doi,
        title=metadata.title,
        journal=journal,
        volume=metadata.volume,
        issue=metadata.issue,
    )


def update_publication(publication: Publication, *, pmid: str, doi: str | None) -> Publication:
    """Fill in identifiers the catalog is missing; never overwrite existing ones."""

    changes: dict[str, str] = {}
    if not publication.pmid:
        changes["pmid"] = pmid
    if doi and not publication.doi:
        changes["doi"] = doi
    if not changes:
        return publication
    return replace(publication, **changes)


# RepositoryCopy -------------------------------------------------------------


def external_ids_for(record: NihmsPublication) -> list[str]:
    return [value for value in (record.pmc_id, record.nihms_id) if value]


def new_repository_copy(
    record: NihmsPublication,
    *,
    publication: EntityRef | None,
    repository: EntityRef,
    access_url: str | None,
) -> RepositoryCopy:
    return RepositoryCopy(
        publication=publication,
        repository=repository,
        external_ids=external_ids_for(record),
        access_url=access_url,
        copy_status=calc_copy_status(record, None),
    )


def update_repository_copy(
    repository_copy: RepositoryCopy,
    record: NihmsPublication,
    *,
    access_url: str | None,
) -> RepositoryCopy:
    external_ids = list(repository_copy.external_ids)
    external_ids.extend(value for value in external_ids_for(record) if value not in external_ids)
    return replace(
        repository_copy,
        external_ids=external_ids,
        access_url=access_url or repository_copy.access_url,
        copy_status=calc_copy_status(record, repository_copy.copy_status),
    )


# Deposit --------------------------------------------------------------------


def assigned_id_for(record: NihmsPublication) -> str | None:
    """PMC id once assigned, otherwise the provisional NIHMS id."""

    return record.pmc_id or record.nihms_id


def new_deposit(
    record: NihmsPublication,
    *,
    repository: EntityRef,
    submission: EntityRef | None = None,
    repository_copy: EntityRef | None = None,
    access_url: str | None = None,
) -> Deposit:
    return Deposit(
        submission=submission,
        repository=repository,
        repository_copy=repository_copy,
        deposit_status=calc_deposit_status(record, None),
        assigned_id=assigned_id_for(record),
        access_url=access_url,
        user_action_required=is_user_action_required(record),
    )


def update_deposit(
    deposit: Deposit,
    record: NihmsPublication,
    *,
    repository_copy: EntityRef | None = None,
    access_url: str | None = None,
) -> Deposit:
    return replace(
        deposit,
        repository_copy=deposit.repository_copy or repository_copy,
        deposit_status=calc_deposit_status(record, deposit.deposit_status),
        assigned_id=assigned_id_for(record) or deposit.assigned_id,
        access_url=access_url or deposit.access_url,
        user_action_required=is_user_action_required(record),
    )


# Submission -----------------------------------------------------------------


def new_submission(
    *,
    publication: EntityRef | None,
    grant: Grant,
    repository: EntityRef,
) -> Submission:
    if grant.id is None:
        raise ValueError("A Submission can only be built for a Grant read from the catalog")
    return Submission(
        publication=publication,
        user=grant.pi,
        repositories=[repository],
        grants=[grant.id],
        source=SubmissionSource.OTHER,
    )


def update_submission_grants(submission: Submission, grant: EntityRef) -> Submission:
    if grant in submission.grants:
        return submission
    return replace(submission, grants=[*submission.grants, grant])


def add_submission_repository(submission: Submission, repository: EntityRef) -> Submission:
    if repository in submission.repositories:
        return submission
    return replace(submission, repositories=[*submission.repositories, repository])


def mark_submitted(submission: Submission, record: NihmsPublication) -> Submission:
    """Flag a submission that NIHMS already holds a copy of as submitted."""

    if submission.submitted:
        return submission
    return replace(
        submission,
        submitted=True,
        source=SubmissionSource.OTHER,
        submitted_date=record.file_deposited_date or submission.submitted_date,
    )


def with_aggregated_status(
    submission: Submission,
    status: AggregatedDepositStatus,
) -> Submission:
    if submission.aggregated_deposit_status is status:
        return submission
    return replace(submission, aggregated_deposit_status=status)
