"""Entrez (PubMed) metadata adapter."""

from __future__ import annotations

from .client import EntrezAPIError, EntrezClient
from .resolver import EntrezMetadataResolver
from .schema import DocumentSummary, ESummaryResponse
from .translator import translate_summary

__all__ = [
    "DocumentSummary",
    "ESummaryResponse",
    "EntrezAPIError",
    "EntrezClient",
    "EntrezMetadataResolver",
    "translate_summary",
]
