from __future__ import annotations

from datetime import date

import pytest

from nihmsync.domain.errors import RecordValidationError
from nihmsync.domain.model import ComplianceStatus
from nihmsync.domain.normalize import (
    award_number_variants,
    build_record,
    normalize_doi,
    normalize_pmcid,
    parse_compliance_status,
    parse_lifecycle_date,
)


def test_build_record_normalizes_every_field() -> None:
    record = build_record(
        pmid=" 12345678 ",
        grant_number="A12 BC000001",
        compliance="IN_PROCESS",
        nihms_id=" abcdefg ",
        pmc_id="PMC9876543",
        file_deposited_date="12/12/2018",
        initial_approval_date="",
    )

    assert record.pmid == "12345678"
    assert record.grant_number == "A12 BC000001"
    assert record.compliance is ComplianceStatus.IN_PROCESS
    assert record.nihms_id == "abcdefg"
    assert record.pmc_id == "9876543"
    assert record.file_deposited_date == date(2018, 12, 12)
    assert record.initial_approval_date is None
    assert record.is_file_deposited
    assert not record.has_initial_approval


@pytest.mark.parametrize("pmid", [None, "", "  ", "12"])
def test_build_record_rejects_short_or_missing_pmid(pmid: str | None) -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        build_record(pmid=pmid, grant_number="A12BC000001", compliance="compliant")

    assert excinfo.value.field == "pmid"
    assert "pmid" in str(excinfo.value)


def test_build_record_rejects_short_award_number() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        build_record(pmid="12345678", grant_number="A1", compliance="compliant")

    assert excinfo.value.field == "grant_number"
    assert excinfo.value.value == "A1"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("compliant", ComplianceStatus.COMPLIANT),
        ("NON_COMPLIANT", ComplianceStatus.NON_COMPLIANT),
        ("In Process", ComplianceStatus.IN_PROCESS),
        (ComplianceStatus.IN_PROCESS, ComplianceStatus.IN_PROCESS),
    ],
)
def test_parse_compliance_status_is_lenient_about_spelling(
    raw: str | ComplianceStatus, expected: ComplianceStatus
) -> None:
    assert parse_compliance_status(raw) is expected


def test_parse_compliance_status_rejects_unknown_values() -> None:
    with pytest.raises(RecordValidationError, match="expected one of"):
        parse_compliance_status("maybe")


def test_parse_lifecycle_date_reports_field_name() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        parse_lifecycle_date("tagging_complete_date", "2018-12-12")

    assert excinfo.value.field == "tagging_complete_date"


def test_award_number_variants_strips_whitespace_second() -> None:
    assert award_number_variants("A12 BC000001") == ("A12 BC000001", "A12BC000001")
    assert award_number_variants("A12BC000001") == ("A12BC000001",)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10.1000/xyz123", "https://doi.org/10.1000/xyz123"),
        ("https://doi.org/10.1000/xyz123", "https://doi.org/10.1000/xyz123"),
        ("doi:10.1000/xyz123", "https://doi.org/10.1000/xyz123"),
        ("not-a-doi", None),
        (None, None),
    ],
)
def test_normalize_doi(raw: str | None, expected: str | None) -> None:
    assert normalize_doi(raw) == expected


def test_normalize_pmcid_drops_prefix_and_blanks() -> None:
    assert normalize_pmcid("pmc123") == "123"
    assert normalize_pmcid("123") == "123"
    assert normalize_pmcid("PMC") is None
    assert normalize_pmcid("   ") is None
