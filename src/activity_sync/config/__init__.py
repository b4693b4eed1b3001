"""Application configuration helpers."""

from __future__ import annotations

from .delivery import DeliveryConfig, get_delivery_config
from .env import env_flag, optional_env, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .gitlab import GitLabConfig, get_gitlab_config, parse_repositories
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import ReconciliationConfig, get_reconciliation_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "DeliveryConfig",
    "GitLabConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_delivery_config",
    "get_gitlab_config",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_env",
    "parse_repositories",
    "require_env_var",
    "require_env_vars",
]
