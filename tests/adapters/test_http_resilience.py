from __future__ import annotations

import asyncio
from typing import cast

import httpx
import pytest
from hishel import Response as HishelCacheResponse

from nihmsync.adapters.http_resilience import (  # pyright: ignore[reportPrivateUsage]
    ResilientClient,
    _build_cache_components,
    _ShouldCacheResponseFilter,
)
from nihmsync.config.entrez import is_cacheable_summary
from nihmsync.config.http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy


def test_cache_disabled_returns_no_components() -> None:
    assert _build_cache_components(None) == (None, None)
    assert _build_cache_components(CacheConfig(enabled=False)) == (None, None)


def test_cache_with_predicate_builds_policy() -> None:
    storage, policy = _build_cache_components(CacheConfig(should_cache=is_cacheable_summary))

    assert storage is not None
    assert policy is not None


def test_cache_without_predicate_uses_default_policy() -> None:
    storage, policy = _build_cache_components(CacheConfig())

    assert storage is not None
    assert policy is None


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (b'{"result": {"uids": []}}', True),
        (b'{"error": "API key invalid"}', False),
        (b"not json", False),
        (None, False),
    ],
)
def test_cache_filter_keeps_only_accepted_payloads(body: bytes | None, expected: bool) -> None:
    cache_filter = _ShouldCacheResponseFilter(is_cacheable_summary)

    assert cache_filter.needs_body()
    assert cache_filter.apply(cast("HishelCacheResponse", object()), body) is expected


def test_get_goes_through_rate_limiter() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="test",
        base_url="https://api.example.org/",
        cache=None,
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url="https://api.example.org/",
                transport=httpx.MockTransport(handler),
            )
            return await client.get("ping", params={"q": "1"})

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    assert seen == ["https://api.example.org/ping?q=1"]
