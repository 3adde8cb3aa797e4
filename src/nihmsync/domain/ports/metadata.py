"""Ports for bibliographic metadata lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True, kw_only=True)
class PubMedRecord:
    """Bibliographic metadata for one PubMed article."""

    pmid: str
    title: str | None = None
    doi: str | None = None
    issn: str | None = None
    essn: str | None = None
    volume: str | None = None
    issue: str | None = None


@runtime_checkable
class MetadataResolver(Protocol):
    """Resolve a PMID to article metadata.

    Returns ``None`` when the service answered but knows no such article.
    Transport and configuration problems raise.
    """

    def lookup(self, pmid: str) -> PubMedRecord | None: ...
