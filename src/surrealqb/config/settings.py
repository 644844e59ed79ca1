"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for query
rendering and logging.

Usage:
    from surrealqb.config import QueryBuilderSettings, get_settings

    # Load from environment variables (SURREALQB_*)
    settings = get_settings()

    # Or override with explicit values
    settings = QueryBuilderSettings(parameter_prefix=":")
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class QueryBuilderSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for query rendering.

    Attributes:
        parameter_prefix: Token placed before parameter names in
            ``equals_parameterized`` fragments.
        segment_separator: Text placed between fragments by ``build``.
        verbose: Log at DEBUG level instead of WARNING.
        log_json: Emit JSON log lines instead of console output.

    Environment Variables:
        SURREALQB_PARAMETER_PREFIX
        SURREALQB_SEGMENT_SEPARATOR
        SURREALQB_VERBOSE
        SURREALQB_LOG_JSON
    """

    model_config = SettingsConfigDict(
        env_prefix="SURREALQB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    parameter_prefix: str = "$"
    segment_separator: str = " "
    verbose: bool = False
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> QueryBuilderSettings:
    """Process-wide settings, read once from the environment.

    Returns:
        Cached QueryBuilderSettings. Call ``get_settings.cache_clear()`` to reload.
    """
    return QueryBuilderSettings()
