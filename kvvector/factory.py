"""Builds stores and backends from settings."""

import logging

import structlog

from kvvector.config import Settings, get_settings
from kvvector.infrastructure.keyvalue import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from kvvector.infrastructure.observability import init_observability
from kvvector.modules.distance import DistanceCalculator
from kvvector.modules.store import Store

logger = structlog.get_logger()


def create_backend(settings: Settings | None = None) -> KeyValueStore:
    """Create the key-value backend selected by ``settings.backend``."""
    settings = settings or get_settings()

    if settings.backend == "sqlite":
        return SQLiteKeyValueStore(settings.sqlite_path)
    return InMemoryKeyValueStore()


def create_store(
    settings: Settings | None = None,
    *,
    backend: KeyValueStore | None = None,
) -> Store:
    """Create a Store wired according to settings.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        backend: Existing backend to build on. A new one is created from
            settings when omitted; either way the caller owns it.

    Returns:
        A store ready for use. setup() is not called.
    """
    settings = settings or get_settings()
    backend = backend if backend is not None else create_backend(settings)

    store = Store(
        backend,
        DistanceCalculator(settings.distance_strategy),
        namespace=settings.namespace,
        on_dimension_mismatch=settings.on_dimension_mismatch,
    )

    logger.info(
        "store_created",
        backend=type(backend).__name__,
        namespace=settings.namespace,
        strategy=settings.distance_strategy.value,
        on_dimension_mismatch=settings.on_dimension_mismatch,
    )

    return store


def configure_observability(settings: Settings | None = None) -> None:
    """Initialize tracing and structured logging from settings."""
    settings = settings or get_settings()

    init_observability(
        settings.service_name,
        settings.service_version,
        otlp_endpoint=settings.otlp_endpoint,
        console_export=settings.console_export,
        enabled=settings.tracing_enabled,
        sample_rate=settings.sample_rate,
        log_level=logging.getLevelName(settings.log_level),
    )
