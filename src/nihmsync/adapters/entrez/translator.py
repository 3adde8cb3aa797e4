"""Translate Entrez summaries into domain metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nihmsync.domain.normalize import normalize_doi, normalize_optional_id
from nihmsync.domain.ports import PubMedRecord

if TYPE_CHECKING:
    from .schema import DocumentSummary


def translate_summary(summary: DocumentSummary) -> PubMedRecord:
    return PubMedRecord(
        pmid=summary.uid,
        title=normalize_optional_id(summary.title),
        doi=normalize_doi(summary.article_id("doi")),
        issn=normalize_optional_id(summary.issn),
        essn=normalize_optional_id(summary.essn),
        volume=normalize_optional_id(summary.volume),
        issue=normalize_optional_id(summary.issue),
    )
