"""Configuration management for the CraftsMatch toolkit.

Handles all application configuration including environment variables, YAML
rule tables, and default settings. Provides structured configuration classes
for the different aspects of the application (bot, shipping, catalog).
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Built-in rule tables, used when the YAML files are missing.
DEFAULT_SHIPPING_RATES: dict[str, dict[str, dict[str, float]]] = {
    "domestic": {
        "standard": {"base_rate": 10.0, "per_kg_rate": 2.0},
        "express": {"base_rate": 25.0, "per_kg_rate": 4.0},
        "overnight": {"base_rate": 45.0, "per_kg_rate": 6.0},
    },
    "regional": {
        "standard": {"base_rate": 20.0, "per_kg_rate": 5.0},
        "express": {"base_rate": 40.0, "per_kg_rate": 8.0},
    },
    "international": {
        "standard": {"base_rate": 40.0, "per_kg_rate": 10.0},
    },
}

DEFAULT_DELIVERY_TIMES: dict[str, dict[str, dict[str, int]]] = {
    "domestic": {
        "standard": {"min_days": 3, "max_days": 7},
        "express": {"min_days": 1, "max_days": 3},
        "overnight": {"min_days": 1, "max_days": 1},
    },
    "regional": {
        "standard": {"min_days": 7, "max_days": 14},
        "express": {"min_days": 3, "max_days": 5},
    },
    "international": {
        "standard": {"min_days": 7, "max_days": 21},
    },
}

DEFAULT_REGIONS: dict[str, list[str]] = {
    "north_america": ["US", "CA", "MX"],
    "europe": [
        "GB", "DE", "FR", "IT", "ES", "PT", "NL", "BE", "LU", "CH",
        "AT", "DK", "SE", "NO", "FI", "IE", "IS", "PL", "CZ",
    ],
    "oceania": ["AU", "NZ"],
    "asia": ["JP", "KR", "CN", "SG", "IN", "HK", "TW"],
    "south_america": ["BR", "AR", "CL", "CO", "PE"],
    "middle_east": ["AE", "SA", "IL", "TR"],
    "africa": ["ZA", "NG", "KE", "EG", "MA"],
}

DEFAULT_COUNTRY_ALIASES: dict[str, str] = {
    "USA": "US",
    "CAN": "CA",
    "MEX": "MX",
    "UK": "GB",
    "AUS": "AU",
    "NZL": "NZ",
}


class ShippingConfig(BaseSettings):
    """Shipping cost and delivery estimation parameters.

    Attributes:
        currency: Currency used for estimates when the product has none.
        default_weight_kg: Weight assumed for calculated products without one.
        volumetric_divisor: Divisor of the L x W x H (cm) volumetric formula.
        additional_unit_factor: Share of unit weight charged per extra unit.
        free_shipping_threshold: Order value from which calculated shipping
            is free, None disables the store-wide threshold.
        fallback_min_days: Lower bound for unknown zone/method pairs.
        fallback_max_days: Upper bound for unknown zone/method pairs.
    """
    model_config = SettingsConfigDict(env_prefix="SHIPPING_")

    currency: str = "USD"
    default_weight_kg: float = 1.0
    volumetric_divisor: float = 5000.0
    additional_unit_factor: float = 0.75
    free_shipping_threshold: float | None = None
    fallback_min_days: int = 7
    fallback_max_days: int = 30


class CatalogConfig(BaseSettings):
    """Product catalog data source.

    Attributes:
        backend: "yaml" to load the catalog file, "memory" for an empty store.
        path: Catalog YAML path, defaults to the bundled demo catalog.
    """
    backend: str = Field(default="yaml", validation_alias="CATALOG_BACKEND")
    path: str | None = Field(default=None, validation_alias="CATALOG_PATH")


class BotConfig(BaseSettings):
    """Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
        webhook_domain: Public domain for webhooks, polling when unset.
        default_seller_country: Seller country for products without one.
    """
    bot_token: str | None = Field(default=None, validation_alias="BOT_TOKEN")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    webhook_domain: str | None = Field(default=None, validation_alias="WEBHOOK_DOMAIN")
    default_seller_country: str = Field(default="US", validation_alias="DEFAULT_SELLER_COUNTRY")

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class Config:
    """Application configuration manager.

    Centralizes loading of environment settings and the YAML rule tables
    (shipping rates, delivery times, zones). Missing YAML files fall back to
    the built-in tables above.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to craftsmatch/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)

        self.bot = BotConfig()
        self.shipping = ShippingConfig()
        self.catalog = CatalogConfig()

        rates_data = self._load_yaml("shipping_rates.yml")
        shipping_data = rates_data.get("shipping", {})
        if shipping_data:
            # Environment variables win over the YAML defaults
            overrides = {
                key: value
                for key, value in shipping_data.items()
                if key in ShippingConfig.model_fields
            }
            self.shipping = ShippingConfig(**{**overrides, **self._env_shipping()})

        self.shipping_rates: dict[str, dict[str, dict[str, float]]] = rates_data.get(
            "rates", DEFAULT_SHIPPING_RATES
        )
        self.delivery_times: dict[str, dict[str, dict[str, int]]] = rates_data.get(
            "delivery_times", DEFAULT_DELIVERY_TIMES
        )

        zones_data = self._load_yaml("shipping_zones.yml")
        self.regions: dict[str, list[str]] = zones_data.get("regions", DEFAULT_REGIONS)
        self.country_aliases: dict[str, str] = zones_data.get(
            "aliases", DEFAULT_COUNTRY_ALIASES
        )

    @property
    def catalog_path(self) -> Path:
        """Resolve the catalog file location."""
        if self.catalog.path:
            return Path(self.catalog.path)
        return self.config_dir / "catalog.yml"

    def _env_shipping(self) -> dict[str, Any]:
        """Return shipping settings explicitly set through the environment."""
        env_only = ShippingConfig()
        return {
            name: getattr(env_only, name)
            for name in env_only.model_fields_set
        }

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        """Load a YAML file from the configuration directory.

        Args:
            filename: File name inside the configuration directory.

        Returns:
            Parsed mapping, empty if the file does not exist.
        """
        path = self.config_dir / filename
        if not path.exists():
            return {}

        with open(path) as f:
            data = yaml.safe_load(f)

        return data or {}


# Global configuration instance
config = Config()
