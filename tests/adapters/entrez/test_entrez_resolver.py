from __future__ import annotations

import time
from collections.abc import Callable  # noqa: TC003
from dataclasses import replace

import httpx
import pytest

from nihmsync.adapters.entrez import EntrezAPIError, EntrezClient, EntrezMetadataResolver
from nihmsync.adapters.http_resilience import ResilientClient
from nihmsync.config.entrez import EntrezConfig
from nihmsync.config.http_resilience import RateLimit, ResilienceConfig


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
    created: list[ResilientClient] | None = None,
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            transport=httpx.MockTransport(async_handler),
        )
        if created is not None:
            created.append(client)
        return client

    return factory


@pytest.fixture
def entrez_config() -> EntrezConfig:
    return EntrezConfig(
        resilience=ResilienceConfig(
            name="entrez-test",
            base_url="https://eutils.example.org/entrez/eutils/",
            cache=None,
        ),
        email="ops@example.org",
        api_key="secret",
    )


def test_lookup_requests_esummary(
    entrez_config: EntrezConfig, esummary_payload: dict[str, object]
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=esummary_payload)

    with EntrezClient(config=entrez_config, client_factory=_make_client_factory(handler)) as client:
        record = EntrezMetadataResolver(client=client).lookup("12345678")

    assert record is not None
    assert record.doi == "https://doi.org/10.1000/jt.2018.12"
    assert len(seen) == 1
    request = seen[0]
    assert request.url.path.endswith("/esummary.fcgi")
    assert request.url.params["db"] == "pubmed"
    assert request.url.params["retmode"] == "json"
    assert request.url.params["id"] == "12345678"
    assert request.url.params["api_key"] == "secret"
    assert request.url.params["email"] == "ops@example.org"
    assert request.url.params["tool"] == "nihmsync"


def test_lookups_share_one_rate_limited_client(
    entrez_config: EntrezConfig, esummary_payload: dict[str, object]
) -> None:
    sent_at: list[float] = []
    created: list[ResilientClient] = []

    def handler(_: httpx.Request) -> httpx.Response:
        sent_at.append(time.monotonic())
        return httpx.Response(200, json=esummary_payload)

    config = replace(
        entrez_config,
        resilience=replace(
            entrez_config.resilience, ratelimit=RateLimit(max_calls=1, per_seconds=0.1)
        ),
    )
    with EntrezClient(
        config=config, client_factory=_make_client_factory(handler, created)
    ) as client:
        resolver = EntrezMetadataResolver(client=client)
        for _ in range(5):
            assert resolver.lookup("12345678") is not None

    assert len(created) == 1
    assert len(sent_at) == 5
    # four waits of one tenth of a second each
    assert sent_at[-1] - sent_at[0] >= 0.3
    assert created[0]._client.is_closed  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_close_without_lookups_is_a_no_op(entrez_config: EntrezConfig) -> None:
    created: list[ResilientClient] = []
    client = EntrezClient(
        config=entrez_config,
        client_factory=_make_client_factory(lambda _: httpx.Response(200), created),
    )

    client.close()
    client.close()

    assert created == []


def test_lookup_returns_none_for_unknown_article(entrez_config: EntrezConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "result": {
                    "uids": ["12345678"],
                    "12345678": {"uid": "12345678", "error": "cannot get document summary"},
                }
            },
        )

    with EntrezClient(config=entrez_config, client_factory=_make_client_factory(handler)) as client:
        assert EntrezMetadataResolver(client=client).lookup("12345678") is None


def test_lookup_returns_none_for_empty_result(entrez_config: EntrezConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": {"uids": []}})

    with EntrezClient(config=entrez_config, client_factory=_make_client_factory(handler)) as client:
        assert EntrezMetadataResolver(client=client).lookup("12345678") is None


def test_top_level_error_raises(entrez_config: EntrezConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "API key invalid"})

    with (
        EntrezClient(config=entrez_config, client_factory=_make_client_factory(handler)) as client,
        pytest.raises(EntrezAPIError, match="API key invalid"),
    ):
        EntrezMetadataResolver(client=client).lookup("12345678")


def test_http_error_propagates(entrez_config: EntrezConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={})

    with (
        EntrezClient(config=entrez_config, client_factory=_make_client_factory(handler)) as client,
        pytest.raises(httpx.HTTPStatusError),
    ):
        EntrezMetadataResolver(client=client).lookup("12345678")


def test_resolver_requires_config_or_client() -> None:
    with pytest.raises(ValueError, match="config or a client"):
        EntrezMetadataResolver()


def test_resolver_closes_only_the_client_it_built(entrez_config: EntrezConfig) -> None:
    owned = EntrezMetadataResolver(config=entrez_config)
    owned.close()

    closed: list[bool] = []

    class _Borrowed(EntrezClient):
        def close(self) -> None:
            closed.append(True)

    EntrezMetadataResolver(client=_Borrowed(config=entrez_config)).close()

    assert closed == []
