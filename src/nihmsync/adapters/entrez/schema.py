"""Entrez esummary response schemas (``db=pubmed``, ``retmode=json``)."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class EntrezBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Entrez %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class ArticleId(EntrezBaseModel):
    idtype: str
    value: str
    idtypen: int | None = None


class DocumentSummary(EntrezBaseModel):
    """One entry of ``result``, keyed by PMID in the raw payload."""

    uid: str
    title: str | None = None
    source: str | None = None
    full_journal_name: str | None = Field(default=None, alias="fulljournalname")
    volume: str | None = None
    issue: str | None = None
    pages: str | None = None
    issn: str | None = None
    essn: str | None = None
    pubdate: str | None = None
    article_ids: list[ArticleId] = Field(default_factory=list[ArticleId], alias="articleids")
    error: str | None = None

    def article_id(self, idtype: str) -> str | None:
        for article_id in self.article_ids:
            if article_id.idtype == idtype and article_id.value:
                return article_id.value
        return None


class ESummaryResponse(BaseModel):
    """Top level of an esummary payload.

    ``result`` mixes a ``uids`` list with one summary object per uid, so it is
    kept loosely typed and summaries are validated on access.
    """

    model_config = ConfigDict(extra="ignore")

    result: dict[str, object] | None = None
    error: str | None = None

    def summary(self, pmid: str) -> DocumentSummary | None:
        if self.result is None:
            return None
        raw = self.result.get(pmid)
        if not isinstance(raw, dict):
            return None
        return DocumentSummary.model_validate(raw)
