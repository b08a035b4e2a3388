"""Key-value store backends and the factory that picks one from settings."""

import logging

from yardpass.application.interfaces import KeyValueStore
from yardpass.config import Settings

from .fallback_store import FallbackKeyValueStore
from .memory_store import InMemoryKeyValueStore
from .rest_store import RestKeyValueStore
from .sql_store import SQLAlchemyKeyValueStore

logger = logging.getLogger(__name__)


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """Pick the store backend from settings: REST KV, then SQL, then memory."""
    if settings.kv_rest_api_url.strip() and settings.kv_rest_api_token.strip():
        primary: KeyValueStore = RestKeyValueStore(
            settings.kv_rest_api_url.strip(), settings.kv_rest_api_token.strip()
        )
    elif settings.database_url.strip():
        primary = SQLAlchemyKeyValueStore(
            settings.database_url.strip(), echo=(settings.log_level_sql.upper() == "DEBUG")
        )
    else:
        logger.warning("No KV store configured; passes and CMS edits will not survive a restart.")
        return InMemoryKeyValueStore()

    logger.info("Using %s key-value store with in-memory fallback", primary.name)
    return FallbackKeyValueStore(primary)


__all__ = [
    "FallbackKeyValueStore",
    "InMemoryKeyValueStore",
    "RestKeyValueStore",
    "SQLAlchemyKeyValueStore",
    "build_key_value_store",
]
