"""Error taxonomy for the transform/load core.

Everything here is fatal for the record being processed. The batch boundary
logs it and moves on to the next record.
"""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures that abort one record."""


class RecordValidationError(ValueError):
    """Raised when a source record field is missing or malformed."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(f'{field} "{value}" is not valid: {reason}')
        self.field = field
        self.value = value


class GrantNotFoundError(ReconciliationError):
    """Raised when no Grant matches the record's award number."""

    def __init__(self, award_number: str, pmid: str | None = None) -> None:
        message = f'No Grant matching award number "{award_number}" was found.'
        if pmid is not None:
            message += f" Cannot process submission with pmid {pmid}"
        super().__init__(message)
        self.award_number = award_number
        self.pmid = pmid


class DataCorruptionError(ReconciliationError):
    """Raised when the catalog holds several entities where at most one may exist."""


class IncompleteChangeSetError(ReconciliationError):
    """Raised when the loader is handed a change set it cannot apply."""
