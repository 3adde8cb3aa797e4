"""Identifier normalization for NIHMS export rows and PubMed metadata.

Each helper either returns a cleaned value or raises
:class:`~nihmsync.domain.errors.RecordValidationError` naming the field and
the offending value. Nothing here talks to the catalog.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Final

from nihmsync.domain.errors import RecordValidationError
from nihmsync.domain.model import ComplianceStatus, NihmsPublication

MIN_IDENTIFIER_LENGTH: Final[int] = 3
LIFECYCLE_DATE_FORMAT: Final[str] = "%m/%d/%Y"
DOI_PREFIX: Final[str] = "https://doi.org/"
VALID_DOI_MARKER: Final[str] = "10."

_WHITESPACE = re.compile(r"\s+")
_DOI_PREFIXES: Final[tuple[str, ...]] = (
    "https://doi.org/",
    "http://doi.org/",
    "https://dx.doi.org/",
    "http://dx.doi.org/",
    "doi:",
)


def normalize_pmid(value: str | None) -> str:
    return _require_identifier("pmid", value)


def normalize_award_number(value: str | None) -> str:
    return _require_identifier("grant_number", value)


def award_number_variants(award_number: str) -> tuple[str, ...]:
    """Return the forms an award number is searched under, original first."""

    stripped = _WHITESPACE.sub("", award_number)
    if stripped == award_number:
        return (award_number,)
    return (award_number, stripped)


def parse_compliance_status(value: ComplianceStatus | str | None) -> ComplianceStatus:
    if isinstance(value, ComplianceStatus):
        return value
    if value is None or not value.strip():
        raise RecordValidationError("compliance", value, "a compliance status is required")
    token = value.strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return ComplianceStatus(token)
    except ValueError:
        allowed = ", ".join(status.value for status in ComplianceStatus)
        raise RecordValidationError("compliance", value, f"expected one of {allowed}") from None


def normalize_optional_id(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def normalize_pmcid(value: str | None) -> str | None:
    """Return the numeric part of a PubMed Central id (``PMC123`` -> ``123``)."""

    cleaned = normalize_optional_id(value)
    if cleaned is None:
        return None
    if cleaned.upper().startswith("PMC"):
        cleaned = cleaned[3:].strip()
    return cleaned or None


def parse_lifecycle_date(field: str, value: date | str | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    cleaned = value.strip()
    if not cleaned:
        return None
    try:
        return datetime.strptime(cleaned, LIFECYCLE_DATE_FORMAT).date()  # noqa: DTZ007
    except ValueError:
        raise RecordValidationError(field, value, "expected a MM/dd/YYYY date") from None


def normalize_doi(value: str | None) -> str | None:
    """Return ``https://doi.org/10....`` or ``None`` when ``value`` is not a DOI."""

    cleaned = normalize_optional_id(value)
    if cleaned is None:
        return None
    lowered = cleaned.lower()
    for prefix in _DOI_PREFIXES:
        if lowered.startswith(prefix):
            cleaned = cleaned[len(prefix) :].strip()
            break
    if VALID_DOI_MARKER not in cleaned:
        return None
    return DOI_PREFIX + cleaned


def build_record(  # noqa: PLR0913
    *,
    pmid: str | None,
    grant_number: str | None,
    compliance: ComplianceStatus | str | None,
    nihms_id: str | None = None,
    pmc_id: str | None = None,
    file_deposited_date: date | str | None = None,
    initial_approval_date: date | str | None = None,
    tagging_complete_date: date | str | None = None,
    final_approval_date: date | str | None = None,
) -> NihmsPublication:
    """Validate raw row values and return the normalized record."""

    return NihmsPublication(
        pmid=normalize_pmid(pmid),
        grant_number=normalize_award_number(grant_number),
        compliance=parse_compliance_status(compliance),
        nihms_id=normalize_optional_id(nihms_id),
        pmc_id=normalize_pmcid(pmc_id),
        file_deposited_date=parse_lifecycle_date("file_deposited_date", file_deposited_date),
        initial_approval_date=parse_lifecycle_date("initial_approval_date", initial_approval_date),
        tagging_complete_date=parse_lifecycle_date("tagging_complete_date", tagging_complete_date),
        final_approval_date=parse_lifecycle_date("final_approval_date", final_approval_date),
    )


def _require_identifier(field: str, value: str | None) -> str:
    if value is None:
        raise RecordValidationError(field, value, "a value is required")
    cleaned = value.strip()
    if len(cleaned) < MIN_IDENTIFIER_LENGTH:
        raise RecordValidationError(
            field, value, f"must be at least {MIN_IDENTIFIER_LENGTH} characters"
        )
    return cleaned
