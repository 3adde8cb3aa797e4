"""Status reconciliation between NIHMS lifecycle signals and catalog state.

NIHMS reports milestone dates, not statuses. The functions below turn those
signals into the next catalog status without ever moving backwards, except
when the signals disappear altogether. That case is treated as upstream drift:
the status drops to a safe floor and a warning is logged so an operator can
look at the record.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from nihmsync.domain.model import (
    AggregatedDepositStatus,
    ComplianceStatus,
    CopyStatus,
    DepositStatus,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nihmsync.domain.model import NihmsPublication

log = getLogger(__name__)


class _Progressive(Protocol):
    @property
    def progress(self) -> int | None: ...


@dataclass(frozen=True, slots=True)
class _Lifecycle[TStatus: _Progressive]:
    label: str
    terminal: TStatus
    in_progress: TStatus
    received: TStatus
    floor: TStatus


_DEPOSIT_LIFECYCLE = _Lifecycle(
    label="Deposit",
    terminal=DepositStatus.ACCEPTED,
    in_progress=DepositStatus.IN_PROGRESS,
    received=DepositStatus.RECEIVED,
    floor=DepositStatus.SUBMITTED,
)

# A file-deposited signal moves a copy to RECEIVED, as it does a deposit. ACCEPTED
# is never reached from a signal, only as the rollback floor.
_COPY_LIFECYCLE = _Lifecycle(
    label="RepositoryCopy",
    terminal=CopyStatus.COMPLETE,
    in_progress=CopyStatus.IN_PROGRESS,
    received=CopyStatus.RECEIVED,
    floor=CopyStatus.ACCEPTED,
)


def _next_status[TStatus: _Progressive](
    record: NihmsPublication,
    current: TStatus | None,
    lifecycle: _Lifecycle[TStatus],
) -> TStatus | None:
    if record.compliance is ComplianceStatus.COMPLIANT:
        return lifecycle.terminal
    if record.is_tagging_complete or record.has_initial_approval:
        return lifecycle.in_progress
    if record.is_file_deposited:
        return lifecycle.received

    if current is None:
        return None
    progress = current.progress
    received = lifecycle.received.progress
    if progress is not None and received is not None and progress >= received:
        log.warning(
            "The status of the %s for pmid %s was %s, but NIHMS no longer reports any "
            "progress. The status is being rolled back to %s. Please verify the record.",
            lifecycle.label,
            record.pmid,
            current,
            lifecycle.floor,
        )
        return lifecycle.floor
    return current


def calc_deposit_status(
    record: NihmsPublication,
    current: DepositStatus | None,
) -> DepositStatus | None:
    return _next_status(record, current, _DEPOSIT_LIFECYCLE)


def calc_copy_status(
    record: NihmsPublication,
    current: CopyStatus | None,
) -> CopyStatus | None:
    return _next_status(record, current, _COPY_LIFECYCLE)


def is_user_action_required(record: NihmsPublication) -> bool:
    """A file reached NIHMS but the record is still non-compliant."""

    return record.is_file_deposited and record.compliance is ComplianceStatus.NON_COMPLIANT


def needs_deposit(record: NihmsPublication) -> bool:
    return bool(
        record.pmc_id
        or record.nihms_id
        or record.compliance in (ComplianceStatus.COMPLIANT, ComplianceStatus.IN_PROCESS)
    )


class AggregateStatusRule(Protocol):
    def __call__(
        self,
        statuses: Iterable[DepositStatus | None],
        *,
        missing_expected_deposits: bool,
    ) -> AggregatedDepositStatus: ...


def calc_aggregated_deposit_status(
    statuses: Iterable[DepositStatus | None],
    *,
    missing_expected_deposits: bool,
) -> AggregatedDepositStatus:
    """Roll the statuses of a submission's deposits up into one value."""

    known = [status for status in statuses if status is not None]
    if DepositStatus.REJECTED in known:
        return AggregatedDepositStatus.REJECTED
    if not known:
        return AggregatedDepositStatus.NOT_STARTED
    if not missing_expected_deposits and all(s is DepositStatus.ACCEPTED for s in known):
        return AggregatedDepositStatus.ACCEPTED

    submitted = DepositStatus.SUBMITTED.progress or 0
    if all((status.progress or 0) < submitted for status in known):
        return AggregatedDepositStatus.NOT_STARTED
    return AggregatedDepositStatus.IN_PROGRESS
