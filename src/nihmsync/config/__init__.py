"""Application configuration helpers."""

from __future__ import annotations

from .entrez import EntrezConfig, get_entrez_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .loader import DEFAULT_PMC_URL_TEMPLATE, LoaderConfig, get_loader_config
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_PMC_URL_TEMPLATE",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "EntrezConfig",
    "LoaderConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_entrez_config",
    "get_loader_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
