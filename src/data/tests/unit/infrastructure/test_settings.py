"""Unit tests for infrastructure settings."""

import pytest
from pydantic import SecretStr, ValidationError

from aroma.domain.value_objects import LengthOfTime, TimeUnit
from infrastructure.settings import (
    CassandraSettings,
    DatabaseSettings,
    DataLayerDefaults,
    Settings,
    get_data_layer_defaults,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        """Should allow max == min."""
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        """Pool min connections must be >= 1."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)


class TestCassandraSettings:
    """Tests for wide-column store settings."""

    def test_defaults(self):
        settings = CassandraSettings()
        assert settings.contact_points == ["localhost"]
        assert settings.port == 9042
        assert settings.keyspace == "aroma"

    def test_reads_environment(self, monkeypatch):
        """Settings should be read from AROMA_CASSANDRA_* variables."""
        monkeypatch.setenv("AROMA_CASSANDRA_CONTACT_POINTS", '["c1", "c2"]')
        monkeypatch.setenv("AROMA_CASSANDRA_KEYSPACE", "aroma_test")

        settings = CassandraSettings()

        assert settings.contact_points == ["c1", "c2"]
        assert settings.keyspace == "aroma_test"

    def test_password_is_secret(self):
        settings = CassandraSettings(password=SecretStr("hunter2"))
        assert "hunter2" not in repr(settings)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            CassandraSettings(request_timeout_seconds=0)

    def test_protocol_version_bounded(self):
        with pytest.raises(ValidationError):
            CassandraSettings(protocol_version=2)


class TestDataLayerDefaults:
    """Tests for service-wide lifetimes and bounds."""

    def test_default_lifetimes(self):
        defaults = DataLayerDefaults()
        assert defaults.message_lifetime == LengthOfTime(30, TimeUnit.DAYS)
        assert defaults.token_lifetime == LengthOfTime(60, TimeUnit.DAYS)
        assert defaults.activity_lifetime == LengthOfTime(7, TimeUnit.DAYS)

    def test_lifetime_unit_from_environment(self, monkeypatch):
        monkeypatch.setenv("AROMA_DEFAULTS_INBOX_LIFETIME_VALUE", "12")
        monkeypatch.setenv("AROMA_DEFAULTS_INBOX_LIFETIME_UNIT", "HOURS")

        assert DataLayerDefaults().inbox_lifetime == LengthOfTime(12, TimeUnit.HOURS)

    def test_lifetime_must_be_positive(self):
        with pytest.raises(ValidationError):
            DataLayerDefaults(message_lifetime_value=0)

    def test_getter_is_cached(self):
        assert get_data_layer_defaults() is get_data_layer_defaults()


class TestSettings:
    """Tests for the aggregate settings."""

    def test_backend_defaults_to_cassandra(self):
        assert Settings().backend == "cassandra"

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValidationError):
            Settings(backend="mongo")

    def test_sections_available(self):
        settings = Settings()
        assert isinstance(settings.cassandra, CassandraSettings)
        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.defaults, DataLayerDefaults)
