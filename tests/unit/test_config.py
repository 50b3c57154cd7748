"""Tests for configuration loading."""

import pytest

from craftsmatch.config import (
    DEFAULT_DELIVERY_TIMES,
    DEFAULT_REGIONS,
    DEFAULT_SHIPPING_RATES,
    BotConfig,
    Config,
)


def test_bundled_tables_match_builtin_defaults(app_config):
    assert app_config.shipping_rates == DEFAULT_SHIPPING_RATES
    assert app_config.delivery_times == DEFAULT_DELIVERY_TIMES
    assert app_config.regions == DEFAULT_REGIONS
    assert app_config.country_aliases["UK"] == "GB"


def test_missing_config_dir_falls_back_to_defaults(tmp_path):
    config = Config(config_dir=tmp_path / "missing")

    assert config.shipping_rates == DEFAULT_SHIPPING_RATES
    assert config.regions == DEFAULT_REGIONS
    assert config.shipping.fallback_max_days == 30
    assert config.catalog_path == tmp_path / "missing" / "catalog.yml"


def test_yaml_shipping_section(write_config):
    config = write_config(
        shipping_rates={"shipping": {"currency": "EUR", "fallback_max_days": 45, "unknown": 1}}
    )

    assert config.shipping.currency == "EUR"
    assert config.shipping.fallback_max_days == 45
    assert config.shipping.volumetric_divisor == 5000.0


def test_environment_overrides_yaml(monkeypatch, write_config):
    monkeypatch.setenv("SHIPPING_FREE_SHIPPING_THRESHOLD", "150")

    config = write_config(shipping_rates={"shipping": {"free_shipping_threshold": 50}})

    assert config.shipping.free_shipping_threshold == 150.0


def test_custom_zones(write_config):
    config = write_config(shipping_zones={"regions": {"nordics": ["DK", "SE"]}})

    assert config.regions == {"nordics": ["DK", "SE"]}
    assert config.country_aliases["USA"] == "US"


def test_bot_config_listen_host_defaults_to_localhost(monkeypatch) -> None:
    """BotConfig should bind to localhost by default for safer webhooks."""
    monkeypatch.delenv("BOT_LISTEN_HOST", raising=False)

    bot_config = BotConfig()

    assert bot_config.listen_host == "127.0.0.1"


def test_bot_config_listen_host_env_override(monkeypatch) -> None:
    """Environment variable must override listen host when explicitly set."""
    monkeypatch.setenv("BOT_LISTEN_HOST", "0.0.0.0")

    bot_config = BotConfig()

    assert bot_config.listen_host == "0.0.0.0"


def test_webhook_mode_requires_domain(monkeypatch) -> None:
    monkeypatch.delenv("WEBHOOK_DOMAIN", raising=False)
    assert not BotConfig().use_webhook

    monkeypatch.setenv("WEBHOOK_DOMAIN", "bot.example.com")
    assert BotConfig().use_webhook


def test_bundled_zones_keep_norway_as_country_code(app_config):
    """NO must load as a country code, not as YAML boolean false."""
    assert "NO" in app_config.regions["europe"]
    assert all(isinstance(code, str) for codes in app_config.regions.values() for code in codes)


def test_non_string_region_code_is_rejected(write_config):
    from craftsmatch.services.shipping import ShippingService

    config = write_config(shipping_zones={"regions": {"europe": ["DK", False]}})

    with pytest.raises(ValueError, match="quote it"):
        ShippingService(config)
