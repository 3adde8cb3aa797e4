"""PubMed metadata lookups backed by Entrez."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .client import EntrezClient
from .translator import translate_summary

if TYPE_CHECKING:
    from nihmsync.config.entrez import EntrezConfig
    from nihmsync.domain.ports import PubMedRecord

    from .schema import ESummaryResponse

log = getLogger(__name__)


class SummaryClient(Protocol):
    def fetch_summary(self, pmid: str) -> ESummaryResponse: ...


class EntrezMetadataResolver:
    """``MetadataResolver`` implementation for PubMed via esummary."""

    def __init__(
        self,
        *,
        config: EntrezConfig | None = None,
        client: SummaryClient | None = None,
    ) -> None:
        self._owned: EntrezClient | None = None
        if client is None:
            if config is None:
                raise ValueError("Either an Entrez config or a client is required")
            client = self._owned = EntrezClient(config=config)
        self._client = client

    def close(self) -> None:
        """Release the HTTP client this resolver created, if any."""

        if self._owned is not None:
            self._owned.close()

    def lookup(self, pmid: str) -> PubMedRecord | None:
        response = self._client.fetch_summary(pmid)
        summary = response.summary(pmid)
        if summary is None:
            log.info("Entrez returned no summary for pmid %s", pmid)
            return None
        if summary.error:
            log.info("Entrez could not summarize pmid %s: %s", pmid, summary.error)
            return None
        return translate_summary(summary)
