"""Per-row snapshot of a NIHMS compliance export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from nihmsync.domain.model.enums import ComplianceStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class NihmsPublication:
    """One normalized export row. Never persisted.

    Build instances with :func:`nihmsync.domain.normalize.build_record` so the
    identifier checks run; the dataclass itself does no validation.
    """

    pmid: str
    grant_number: str
    compliance: ComplianceStatus
    nihms_id: str | None = None
    pmc_id: str | None = None
    file_deposited_date: date | None = None
    initial_approval_date: date | None = None
    tagging_complete_date: date | None = None
    final_approval_date: date | None = None

    @property
    def is_file_deposited(self) -> bool:
        return self.file_deposited_date is not None

    @property
    def has_initial_approval(self) -> bool:
        return self.initial_approval_date is not None

    @property
    def is_tagging_complete(self) -> bool:
        return self.tagging_complete_date is not None

    @property
    def has_final_approval(self) -> bool:
        return self.final_approval_date is not None
