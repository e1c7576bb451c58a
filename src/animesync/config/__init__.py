"""Application configuration helpers."""

from __future__ import annotations

from .env import float_env_var, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .shikimori import ShikimoriConfig, get_shikimori_config, get_shikimori_site_url
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "ShikimoriConfig",
    "StorageConfig",
    "configure_logging",
    "float_env_var",
    "get_database_config",
    "get_reconciliation_config",
    "get_shikimori_config",
    "get_shikimori_site_url",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
