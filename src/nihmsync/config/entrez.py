"""Entrez (NCBI E-utilities) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_ENTREZ_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
DEFAULT_ENTREZ_TOOL = "nihmsync"

# NCBI allows 3 requests/second without an API key and 10 with one.
ANONYMOUS_RATE_LIMIT = RateLimit(max_calls=3, per_seconds=1.0)
KEYED_RATE_LIMIT = RateLimit(max_calls=10, per_seconds=1.0)


@dataclass(frozen=True, slots=True)
class EntrezConfig:
    resilience: ResilienceConfig
    tool: str = DEFAULT_ENTREZ_TOOL
    email: str | None = None
    api_key: str | None = None


def is_cacheable_summary(payload: object) -> bool:
    """Only successful esummary payloads are worth keeping."""

    return isinstance(payload, dict) and "error" not in payload and "result" in payload


def get_entrez_config() -> EntrezConfig:
    api_key = optional_env_var("ENTREZ_API_KEY")
    resilience = ResilienceConfig(
        name="entrez",
        base_url=optional_env_var("ENTREZ_BASE_URL") or DEFAULT_ENTREZ_BASE_URL,
        ratelimit=KEYED_RATE_LIMIT if api_key else ANONYMOUS_RATE_LIMIT,
        retry=RetryPolicy(total=4),
        cache=CacheConfig(should_cache=is_cacheable_summary),
    )
    return EntrezConfig(
        resilience=resilience,
        tool=optional_env_var("ENTREZ_TOOL") or DEFAULT_ENTREZ_TOOL,
        email=optional_env_var("ENTREZ_EMAIL"),
        api_key=api_key,
    )
