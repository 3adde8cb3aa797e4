"""Transform and load NIHMS records into the catalog."""

from __future__ import annotations

from .catalog import CatalogClient
from .contracts import ChangeSet, LoadResult
from .engine import ReconcileSummary, ReconciliationEngine, RecordFailure, reconcile_records
from .load import SubmissionLoader
from .match import CatalogMatcher, resolve_deposit_for_repository
from .status import (
    AggregateStatusRule,
    calc_aggregated_deposit_status,
    calc_copy_status,
    calc_deposit_status,
    is_user_action_required,
    needs_deposit,
)
from .transform import SubmissionTransformer

__all__ = [
    "AggregateStatusRule",
    "CatalogClient",
    "CatalogMatcher",
    "ChangeSet",
    "LoadResult",
    "ReconcileSummary",
    "ReconciliationEngine",
    "RecordFailure",
    "SubmissionLoader",
    "SubmissionTransformer",
    "calc_aggregated_deposit_status",
    "calc_copy_status",
    "calc_deposit_status",
    "is_user_action_required",
    "needs_deposit",
    "reconcile_records",
    "resolve_deposit_for_repository",
]
