from __future__ import annotations

from datetime import date

import pytest

from nihmsync.config import DEFAULT_PMC_URL_TEMPLATE
from nihmsync.domain.model import (
    CopyStatus,
    Deposit,
    DepositStatus,
    Grant,
    Publication,
    RepositoryCopy,
    Submission,
    SubmissionSource,
)
from nihmsync.domain.ports import PubMedRecord
from nihmsync.domain.reconciliation import build
from tests.helpers.catalog import NIHMS_REPOSITORY, PI_REF, make_record


def test_build_access_url_uses_template() -> None:
    assert (
        build.build_access_url(DEFAULT_PMC_URL_TEMPLATE, "9876543")
        == "https://www.ncbi.nlm.nih.gov/pmc/articles/PMC9876543/"
    )
    assert build.build_access_url(DEFAULT_PMC_URL_TEMPLATE, None) is None


def test_new_publication_copies_metadata() -> None:
    metadata = PubMedRecord(
        pmid="12345678",
        title="A study",
        doi="https://doi.org/10.1/abc",
        volume="12",
        issue="3",
    )

    publication = build.new_publication("12345678", metadata, "journal:1")

    assert publication == Publication(
        pmid="12345678",
        doi="https://doi.org/10.1/abc",
        title="A study",
        journal="journal:1",
        volume="12",
        issue="3",
    )


def test_new_publication_without_metadata_warns(caplog: pytest.LogCaptureFixture) -> None:
    publication = build.new_publication("12345678", None)

    assert publication == Publication(pmid="12345678")
    assert "12345678" in caplog.text


def test_update_publication_only_fills_gaps() -> None:
    existing = Publication(id="publication:1", doi="https://doi.org/10.1/abc")

    updated = build.update_publication(existing, pmid="12345678", doi="https://doi.org/10.9/x")

    assert updated.pmid == "12345678"
    assert updated.doi == "https://doi.org/10.1/abc"
    assert existing.pmid is None
    assert build.update_publication(updated, pmid="12345678", doi=None) is updated


def test_repository_copy_lists_pmc_before_nihms() -> None:
    record = make_record(nihms_id="abcdefg", pmc_id="9876543", compliance="compliant")

    repository_copy = build.new_repository_copy(
        record, publication="publication:1", repository=NIHMS_REPOSITORY, access_url=None
    )

    assert repository_copy.external_ids == ["9876543", "abcdefg"]
    assert repository_copy.copy_status is CopyStatus.COMPLETE


def test_update_repository_copy_merges_ids_without_mutating() -> None:
    existing = RepositoryCopy(
        id="repository_copy:1",
        external_ids=["abcdefg"],
        access_url=None,
        copy_status=CopyStatus.RECEIVED,
    )
    record = make_record(nihms_id="abcdefg", pmc_id="9876543", compliance="compliant")

    updated = build.update_repository_copy(
        existing, record, access_url="https://example.org/PMC9876543/"
    )

    assert updated.external_ids == ["abcdefg", "9876543"]
    assert updated.access_url == "https://example.org/PMC9876543/"
    assert updated.copy_status is CopyStatus.COMPLETE
    assert existing.external_ids == ["abcdefg"]


def test_deposit_assigned_id_prefers_pmc() -> None:
    provisional = build.new_deposit(make_record(nihms_id="abcdefg"), repository=NIHMS_REPOSITORY)
    definitive = build.update_deposit(
        provisional, make_record(nihms_id="abcdefg", pmc_id="9876543", compliance="compliant")
    )

    assert provisional.assigned_id == "abcdefg"
    assert definitive.assigned_id == "9876543"
    assert definitive.deposit_status is DepositStatus.ACCEPTED


def test_update_deposit_keeps_existing_copy_link() -> None:
    existing = Deposit(id="deposit:1", repository_copy="repository_copy:1")

    updated = build.update_deposit(existing, make_record(), repository_copy="repository_copy:2")

    assert updated.repository_copy == "repository_copy:1"


def test_new_submission_takes_pi_and_grant() -> None:
    grant = Grant(id="grant:1", award_number="A12BC000001", pi=PI_REF)

    submission = build.new_submission(
        publication="publication:1", grant=grant, repository=NIHMS_REPOSITORY
    )

    assert submission.user == PI_REF
    assert submission.grants == ["grant:1"]
    assert submission.repositories == [NIHMS_REPOSITORY]
    assert submission.source is SubmissionSource.OTHER
    assert not submission.submitted


def test_update_submission_grants_is_idempotent() -> None:
    submission = Submission(id="submission:1", grants=["grant:0"])

    once = build.update_submission_grants(submission, "grant:1")
    twice = build.update_submission_grants(once, "grant:1")

    assert once.grants == ["grant:0", "grant:1"]
    assert twice is once
    assert submission.grants == ["grant:0"]


def test_mark_submitted_uses_file_deposited_date() -> None:
    submission = Submission(id="submission:1")
    record = make_record(file_deposited_date="12/12/2018")

    marked = build.mark_submitted(submission, record)

    assert marked.submitted
    assert marked.source is SubmissionSource.OTHER
    assert marked.submitted_date == date(2018, 12, 12)
    assert build.mark_submitted(marked, make_record()) is marked
