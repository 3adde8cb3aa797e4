"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Discriminator for catalog entity kinds (table names, ref prefixes)."""

    GRANT = "grant"
    JOURNAL = "journal"
    PUBLICATION = "publication"
    SUBMISSION = "submission"
    REPOSITORY_COPY = "repository_copy"
    DEPOSIT = "deposit"


class ComplianceStatus(StrEnum):
    """Tri-state compliance signal carried by each NIHMS export row."""

    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"
    IN_PROCESS = "in-process"


class SubmissionSource(StrEnum):
    PASS = "pass"  # originated inside the catalog's own submission UI
    OTHER = "other"  # recorded from an external system such as NIHMS


class DepositStatus(StrEnum):
    IN_PREPARATION = "in-preparation"
    READY_TO_SUBMIT = "ready-to-submit"
    SUBMITTED = "submitted"
    RECEIVED = "received"
    IN_PROGRESS = "in-progress"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def progress(self) -> int | None:
        """Position in the deposit lifecycle, ``None`` for states outside it."""

        return _DEPOSIT_PROGRESS.get(self)


class CopyStatus(StrEnum):
    ACCEPTED = "accepted"
    RECEIVED = "received"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    STALLED = "stalled"
    REJECTED = "rejected"

    @property
    def progress(self) -> int | None:
        """Position in the repository-copy lifecycle, ``None`` for states outside it."""

        return _COPY_PROGRESS.get(self)


class AggregatedDepositStatus(StrEnum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


_DEPOSIT_PROGRESS: dict[DepositStatus, int] = {
    status: rank
    for rank, status in enumerate(
        (
            DepositStatus.IN_PREPARATION,
            DepositStatus.READY_TO_SUBMIT,
            DepositStatus.SUBMITTED,
            DepositStatus.RECEIVED,
            DepositStatus.IN_PROGRESS,
            DepositStatus.ACCEPTED,
        )
    )
}

_COPY_PROGRESS: dict[CopyStatus, int] = {
    status: rank
    for rank, status in enumerate(
        (
            CopyStatus.ACCEPTED,
            CopyStatus.RECEIVED,
            CopyStatus.IN_PROGRESS,
            CopyStatus.COMPLETE,
        )
    )
}
