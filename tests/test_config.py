"""Tests for Settings and logging setup."""

import pytest
import structlog

from shopstate import Settings, configure_logging


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings == Settings()
        assert settings.log_level == "info"
        assert settings.tax_rate == 0.08
        assert settings.cod_fee == 3.2
        assert settings.search_debounce_ms == 300
        assert settings.search_debounce_seconds == 0.3
        assert settings.catalog_path is None

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "SHOPSTATE_LOG_LEVEL": " DEBUG ",
                "SHOPSTATE_TAX_RATE": "0.2",
                "SHOPSTATE_COD_FEE": "5",
                "SHOPSTATE_SEARCH_DEBOUNCE_MS": "150",
                "SHOPSTATE_CATALOG_PATH": "/data/products.json",
            }
        )

        assert settings.log_level == "debug"
        assert settings.tax_rate == 0.2
        assert settings.cod_fee == 5.0
        assert settings.search_debounce_ms == 150
        assert settings.catalog_path == "/data/products.json"

    def test_blank_values_use_defaults(self):
        settings = Settings.from_env({"SHOPSTATE_TAX_RATE": "", "SHOPSTATE_CATALOG_PATH": ""})

        assert settings.tax_rate == 0.08
        assert settings.catalog_path is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("SHOPSTATE_COD_FEE", "1.5")

        assert Settings.from_env().cod_fee == 1.5

    @pytest.mark.parametrize(
        "name, value",
        [
            ("SHOPSTATE_TAX_RATE", "eight percent"),
            ("SHOPSTATE_COD_FEE", "free"),
            ("SHOPSTATE_SEARCH_DEBOUNCE_MS", "0.5"),
        ],
    )
    def test_invalid_number(self, name, value):
        with pytest.raises(ValueError, match=name):
            Settings.from_env({name: value})

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="unknown log level"):
            Settings.from_env({"SHOPSTATE_LOG_LEVEL": "chatty"})


class TestConfigureLogging:
    @pytest.mark.parametrize("level", ["debug", "info", "WARNING"])
    def test_accepts_level_names(self, level, reset_structlog):
        configure_logging(level)

        assert structlog.is_configured()

    def test_rejects_unknown_level(self, reset_structlog):
        with pytest.raises(ValueError):
            configure_logging("loud")
