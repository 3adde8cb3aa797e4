"""Resolve an incoming NIHMS record to existing catalog entities.

Each lookup follows a fixed fallback chain and either returns the single
match, returns ``None`` so the caller builds a new entity, or raises when the
catalog holds more candidates than it ever should.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.domain.errors import DataCorruptionError, GrantNotFoundError
from nihmsync.domain.model import Deposit, Grant, Journal, Publication, RepositoryCopy, Submission
from nihmsync.domain.normalize import award_number_variants

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nihmsync.domain.model import EntityRef
    from nihmsync.domain.reconciliation.catalog import CatalogClient

log = getLogger(__name__)


class CatalogMatcher:
    def __init__(self, catalog: CatalogClient) -> None:
        self._catalog = catalog

    # Grant ------------------------------------------------------------------

    def find_grant(self, award_number: str) -> EntityRef | None:
        """Search by award number as given, then with all whitespace removed."""

        if not award_number:
            raise ValueError("award_number cannot be empty")
        for candidate in award_number_variants(award_number):
            grant_ref = self._catalog.find_by_attribute(Grant, "award_number", candidate)
            if grant_ref is not None:
                return grant_ref
        return None

    def resolve_grant(self, award_number: str, pmid: str | None = None) -> EntityRef:
        """Like ``find_grant`` but a miss is fatal for the record named by ``pmid``."""

        grant_ref = self.find_grant(award_number)
        if grant_ref is None:
            raise GrantNotFoundError(award_number, pmid)
        return grant_ref

    def read_grant(self, grant_ref: EntityRef) -> Grant:
        return self._catalog.read(grant_ref, Grant)

    # Publication ------------------------------------------------------------

    def resolve_publication(self, pmid: str, doi: str | None) -> Publication | None:
        """Look up by PMID; fall back to DOI only when the PMID misses."""

        if not pmid:
            raise ValueError("pmid cannot be empty when searching for an existing Publication")
        publication_ref = self._catalog.find_by_attribute(Publication, "pmid", pmid)
        if publication_ref is None and doi:
            publication_ref = self._catalog.find_by_attribute(Publication, "doi", doi)
        if publication_ref is None:
            return None
        return self._catalog.read(publication_ref, Publication)

    def resolve_journal(self, issn: str | None, essn: str | None) -> EntityRef | None:
        for value in (issn, essn):
            if not value:
                continue
            for field in ("issn", "essn"):
                journal_ref = self._catalog.find_by_attribute(Journal, field, value)
                if journal_ref is not None:
                    return journal_ref
        return None

    # RepositoryCopy ---------------------------------------------------------

    def resolve_repository_copy(
        self,
        repository: EntityRef,
        publication: EntityRef,
    ) -> RepositoryCopy | None:
        matches = self._catalog.find_all_by_attributes(
            RepositoryCopy,
            {"repository": repository, "publication": publication},
        )
        if not matches:
            return None
        if len(matches) > 1:
            raise DataCorruptionError(
                f"There are multiple repository copies matching repository {repository} and "
                f"publication {publication}. This indicates a data corruption, please check "
                "the data and try again."
            )
        return self._catalog.read(matches[0], RepositoryCopy)

    # Submission -------------------------------------------------------------

    def resolve_submission(
        self,
        publication: EntityRef,
        user: EntityRef,
        repository: EntityRef,
    ) -> Submission | None:
        """Pick the submission NIHMS progress should be recorded against.

        Preference order: the one submission already listing ``repository``;
        otherwise the earliest-created submission not yet submitted.
        """

        refs = self._catalog.find_all_by_attributes(
            Submission,
            {"publication": publication, "user": user},
        )
        submissions = [self._catalog.read(ref, Submission) for ref in refs]

        in_repository = [s for s in submissions if repository in s.repositories]
        if len(in_repository) > 1:
            raise DataCorruptionError(
                f"2 or more submissions, including {in_repository[0].id} and "
                f"{in_repository[1].id}, contain a reference to repository {repository}. "
                "Only one Submission should contain a reference. Please check the data "
                "before reloading the record."
            )
        if in_repository:
            return in_repository[0]

        for submission in submissions:
            if not submission.submitted:
                log.debug(
                    "Reusing unsubmitted Submission %s for publication %s",
                    submission.id,
                    publication,
                )
                return submission
        return None

    # Deposit ----------------------------------------------------------------

    def read_submission_deposits(self, submission: Submission) -> list[Deposit]:
        return [self._catalog.read(ref, Deposit) for ref in submission.deposits]


def resolve_deposit_for_repository(
    deposits: Iterable[Deposit | None],
    repository: EntityRef,
) -> Deposit | None:
    """Return the deposit made to ``repository``, if any."""

    for deposit in deposits:
        if deposit is not None and deposit.repository == repository:
            return deposit
    return None
