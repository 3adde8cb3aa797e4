from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.orm import Session

from nihmsync.adapters.sqlalchemy.repositories import SqlAlchemyCatalogRepository
from nihmsync.domain.model import (
    AggregatedDepositStatus,
    CopyStatus,
    Deposit,
    DepositStatus,
    Grant,
    Publication,
    RepositoryCopy,
    Submission,
    SubmissionSource,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def repository(sqlite_engine: Engine) -> Iterator[SqlAlchemyCatalogRepository]:
    with Session(sqlite_engine) as session:
        yield SqlAlchemyCatalogRepository(session)


def test_create_and_read_round_trips_all_fields(repository: SqlAlchemyCatalogRepository) -> None:
    submission = Submission(
        publication="publication:1",
        user="user:pi",
        repositories=["repository:nihms"],
        grants=["grant:1", "grant:2"],
        deposits=[],
        submitted=True,
        source=SubmissionSource.OTHER,
        submitted_date=date(2018, 12, 12),
        aggregated_deposit_status=AggregatedDepositStatus.IN_PROGRESS,
    )

    ref = repository.create(submission)
    stored = repository.read(ref, Submission)

    assert ref.startswith("submission:")
    assert stored is not None
    assert stored.id == ref
    assert stored.grants == ["grant:1", "grant:2"]
    assert stored.source is SubmissionSource.OTHER
    assert stored.submitted_date == date(2018, 12, 12)
    assert stored.aggregated_deposit_status is AggregatedDepositStatus.IN_PROGRESS


def test_read_with_wrong_kind_or_ref_returns_none(repository: SqlAlchemyCatalogRepository) -> None:
    ref = repository.create(Publication(pmid="12345678"))

    assert repository.read(ref, Deposit) is None
    assert repository.read("publication:missing", Publication) is None


def test_find_all_by_attributes_in_creation_order(
    repository: SqlAlchemyCatalogRepository,
) -> None:
    first = repository.create(RepositoryCopy(publication="publication:1", repository="r:1"))
    repository.create(RepositoryCopy(publication="publication:2", repository="r:1"))
    second = repository.create(
        RepositoryCopy(
            publication="publication:1",
            repository="r:1",
            copy_status=CopyStatus.RECEIVED,
        )
    )

    refs = repository.find_all_by_attributes(
        RepositoryCopy, {"publication": "publication:1", "repository": "r:1"}
    )

    assert refs == (first, second)
    assert repository.find_by_attribute(RepositoryCopy, "copy_status", CopyStatus.RECEIVED) == second
    assert repository.find_by_attribute(Publication, "pmid", "nope") is None


def test_find_by_null_attribute(repository: SqlAlchemyCatalogRepository) -> None:
    ref = repository.create(Grant(award_number="A12BC000001"))

    assert repository.find_by_attribute(Grant, "pi", None) == ref


def test_unknown_attribute_is_rejected(repository: SqlAlchemyCatalogRepository) -> None:
    with pytest.raises(ValueError, match="Unknown attribute"):
        repository.find_by_attribute(Grant, "title", "x")


def test_update_replaces_stored_values(repository: SqlAlchemyCatalogRepository) -> None:
    ref = repository.create(Deposit(repository="repository:nihms"))
    deposit = repository.read(ref, Deposit)
    assert deposit is not None

    deposit.deposit_status = DepositStatus.ACCEPTED
    deposit.assigned_id = "9876543"
    repository.update(deposit)

    assert repository.read(ref, Deposit) == deposit


def test_update_missing_entity_raises(repository: SqlAlchemyCatalogRepository) -> None:
    with pytest.raises(LookupError):
        repository.update(Deposit(id="deposit:missing"))
    with pytest.raises(ValueError, match="without a reference"):
        repository.update(Deposit())
