"""Entrez E-utilities API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from nihmsync.adapters.http_resilience import ResilientClient

from .schema import ESummaryResponse

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from nihmsync.config.entrez import EntrezConfig
    from nihmsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

ESUMMARY_PATH = "esummary.fcgi"


class EntrezAPIError(RuntimeError):
    """Raised when the Entrez API returns an unexpected response."""


class EntrezClient:
    """Low-level HTTP client for the esummary endpoint.

    One event loop and one ``ResilientClient`` serve every lookup made through
    the instance, so the rate limit and the response cache span a whole batch.
    Call ``close`` (or use the client as a context manager) when done.
    """

    def __init__(
        self,
        *,
        config: EntrezConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._http: ResilientClient | None = None

    def __enter__(self) -> EntrezClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def fetch_summary(self, pmid: str) -> ESummaryResponse:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(self._fetch_summary_async(pmid))

    def close(self) -> None:
        if self._runner is None:
            return
        if self._http is not None:
            self._runner.run(self._http.aclose())
            self._http = None
        self._runner.close()
        self._runner = None

    async def _fetch_summary_async(self, pmid: str) -> ESummaryResponse:
        if self._resilience.base_url is None:
            raise EntrezAPIError("Missing Entrez base_url in resilience configuration")

        params: dict[str, str] = {"db": "pubmed", "retmode": "json", "id": pmid}
        if self._config.tool:
            params["tool"] = self._config.tool
        if self._config.email:
            params["email"] = self._config.email
        if self._config.api_key:
            params["api_key"] = self._config.api_key

        if self._http is None:
            self._http = self._client_factory(self._resilience)
        response = await self._http.get(ESUMMARY_PATH, params=params)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise EntrezAPIError("Unexpected Entrez response payload")

        summary = ESummaryResponse.model_validate(payload)
        if summary.error:
            raise EntrezAPIError(f"Entrez returned an error for pmid {pmid}: {summary.error}")
        return summary
