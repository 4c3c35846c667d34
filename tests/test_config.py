"""Tests for settings and store wiring."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kvvector.config import Settings
from kvvector.factory import configure_observability, create_backend, create_store
from kvvector.infrastructure.keyvalue import InMemoryKeyValueStore, SQLiteKeyValueStore
from kvvector.modules.distance import DistanceStrategy
from kvvector.modules.documents import Vector, VectorDocument


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        """Defaults select an in-memory cosine store."""
        monkeypatch.delenv("KVVECTOR_BACKEND", raising=False)
        monkeypatch.delenv("KVVECTOR_DISTANCE_STRATEGY", raising=False)

        settings = Settings(_env_file=None)

        assert settings.backend == "memory"
        assert settings.distance_strategy is DistanceStrategy.COSINE
        assert settings.namespace == "vectors"
        assert settings.on_dimension_mismatch == "raise"
        assert settings.tracing_enabled is False

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch):
        """KVVECTOR_* variables override defaults."""
        monkeypatch.setenv("KVVECTOR_DISTANCE_STRATEGY", "chebyshev")
        monkeypatch.setenv("KVVECTOR_NAMESPACE", "products")
        monkeypatch.setenv("KVVECTOR_ON_DIMENSION_MISMATCH", "skip")

        settings = Settings(_env_file=None)

        assert settings.distance_strategy is DistanceStrategy.CHEBYSHEV
        assert settings.namespace == "products"
        assert settings.on_dimension_mismatch == "skip"

    def test_rejects_unknown_strategy(self):
        """Strategy values are validated."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, distance_strategy="hamming")

    def test_rejects_bad_sample_rate(self):
        """sample_rate must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sample_rate=1.5)


class TestFactory:
    """Tests for create_backend() and create_store()."""

    def test_memory_backend(self):
        """The memory backend is the default."""
        backend = create_backend(Settings(_env_file=None, backend="memory"))

        assert isinstance(backend, InMemoryKeyValueStore)

    def test_sqlite_backend(self, tmp_path: Path):
        """The SQLite backend opens the configured path."""
        path = tmp_path / "store.db"

        backend = create_backend(
            Settings(_env_file=None, backend="sqlite", sqlite_path=str(path))
        )

        assert isinstance(backend, SQLiteKeyValueStore)
        assert path.exists()
        backend.close()

    def test_create_store_applies_settings(self):
        """The store uses the configured strategy and namespace."""
        settings = Settings(
            _env_file=None,
            distance_strategy=DistanceStrategy.EUCLIDEAN,
            namespace="catalog",
        )
        backend = InMemoryKeyValueStore()

        store = create_store(settings, backend=backend)
        store.add(
            [
                VectorDocument("a", Vector((1.0, 5.0))),
                VectorDocument("b", Vector((1.0, 2.0))),
            ]
        )

        assert store.distance_calculator.strategy is DistanceStrategy.EUCLIDEAN
        assert store.namespace == "catalog"
        assert [d.id for d in store.query([1.0, 2.1])] == ["b", "a"]
        assert backend.get("catalog.index") == ["a", "b"]

    def test_configure_observability_passes_settings(self):
        """Observability is initialized from settings."""
        settings = Settings(
            _env_file=None,
            tracing_enabled=True,
            otlp_endpoint="http://collector:4318",
            sample_rate=0.25,
            log_level="DEBUG",
        )

        with patch("kvvector.factory.init_observability") as mock_init:
            configure_observability(settings)

        mock_init.assert_called_once_with(
            "kvvector",
            "0.1.0",
            otlp_endpoint="http://collector:4318",
            console_export=False,
            enabled=True,
            sample_rate=0.25,
            log_level=logging.DEBUG,
        )
