"""Tests for library settings."""

import pytest
from pydantic import ValidationError

from analytic.core.config import Settings, get_settings
from analytic.math import Complex, Matrix


class TestSettingsDefaults:
    """Test default values."""

    def test_logging_defaults(self):
        """Test default logging configuration."""
        settings = Settings()
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.LOG_FORMAT == "text"
        assert settings.LOG_FILE is None

    def test_compare_defaults(self):
        """Test default fuzzy comparison configuration."""
        settings = Settings()
        assert settings.COMPARE_TOLERANCE == 0.001
        assert settings.COMPARE_MODE == "relative"
        assert settings.ZERO_LEVEL == 1e-14
        assert settings.ZERO_LEVEL_TOL == 1e-12

    def test_app_identity(self):
        """Test application name and version."""
        settings = Settings()
        assert settings.APP_NAME == "analytic-math"
        assert settings.APP_VERSION == "0.1.0"


class TestSettingsEnvironment:
    """Test ANALYTIC_ prefixed environment overrides."""

    def test_env_override(self, monkeypatch):
        """Test that prefixed variables override defaults."""
        monkeypatch.setenv("ANALYTIC_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ANALYTIC_COMPARE_TOLERANCE", "0.5")
        settings = Settings()
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.COMPARE_TOLERANCE == 0.5

    def test_unprefixed_variable_ignored(self, monkeypatch):
        """Test that variables without the prefix are not read."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings().LOG_LEVEL == "WARNING"

    def test_get_settings_is_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_environment(self, monkeypatch):
        """Test that clearing the cache picks up new variables."""
        first = get_settings()
        monkeypatch.setenv("ANALYTIC_COMPARE_MODE", "absolute")
        get_settings.cache_clear()
        second = get_settings()
        assert first is not second
        assert second.COMPARE_MODE == "absolute"


class TestSettingsValidation:
    """Test field validators."""

    def test_log_format_normalized(self):
        """Test that LOG_FORMAT is lowercased."""
        assert Settings(LOG_FORMAT="JSON").LOG_FORMAT == "json"

    def test_invalid_log_format(self):
        """Test that unknown log formats are rejected."""
        with pytest.raises(ValidationError):
            Settings(LOG_FORMAT="xml")

    def test_negative_tolerance(self):
        """Test that negative tolerances are rejected."""
        with pytest.raises(ValidationError):
            Settings(COMPARE_TOLERANCE=-1)

    @pytest.mark.parametrize("field", ["ZERO_LEVEL", "ZERO_LEVEL_TOL"])
    def test_negative_zero_level(self, field):
        """Test that negative zero-level settings are rejected."""
        with pytest.raises(ValidationError, match=field):
            Settings(**{field: -1e-14})

    def test_unknown_compare_mode(self):
        """Test that unknown compare modes are rejected."""
        with pytest.raises(ValidationError):
            Settings(COMPARE_MODE="loose")


class TestCompareUsesSettings:
    """Test that compare() picks up configured defaults."""

    def test_default_tolerance_is_strict(self):
        """Test that 5% apart fails with the default 0.1% tolerance."""
        assert not Complex(1).compare(Complex(1.05))

    def test_configured_tolerance(self, monkeypatch):
        """Test that a looser configured tolerance is used."""
        monkeypatch.setenv("ANALYTIC_COMPARE_TOLERANCE", "0.1")
        assert Complex(1).compare(Complex(1.05))
        assert Matrix([[1, 2]]).compare(Matrix([[1.05, 2.1]]))

    def test_explicit_tolerance_wins(self, monkeypatch):
        """Test that explicit arguments override settings."""
        monkeypatch.setenv("ANALYTIC_COMPARE_TOLERANCE", "0.1")
        assert not Complex(1).compare(Complex(1.05), tolerance=0.001)
