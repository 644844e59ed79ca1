"""Configuration module using Pydantic Settings and structlog.

Usage:
    from surrealqb.config import configure_logging, get_settings

    settings = get_settings()
    configure_logging(verbose=True)
"""

from surrealqb.config.logging import configure_logging
from surrealqb.config.settings import QueryBuilderSettings, get_settings

__all__ = [
    "QueryBuilderSettings",
    "get_settings",
    "configure_logging",
]
