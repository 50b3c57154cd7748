"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including configurations,
sample products and environment setup. Ensures test isolation by resetting
the lazily created service singletons.
"""

import os
from decimal import Decimal
from pathlib import Path

import pytest
import yaml

from craftsmatch.config import Config
from craftsmatch.models import Product, ProductShippingDetails, ShippingType
from craftsmatch.services import carriers, catalog, shipping
from craftsmatch.services.shipping import ShippingService

TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "test_bot_token_placeholder")


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        "BOT_TOKEN": TEST_BOT_TOKEN,
        "CATALOG_BACKEND": "yaml",
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture(autouse=True)
def reset_service_singletons():
    """Drop lazily created services so every test builds its own."""
    shipping._shipping_service = None
    catalog._product_store = None
    carriers._carrier_service = None
    yield
    shipping._shipping_service = None
    catalog._product_store = None
    carriers._carrier_service = None


@pytest.fixture
def app_config():
    """Configuration loaded from the bundled YAML tables."""
    return Config()


@pytest.fixture
def shipping_service(app_config):
    return ShippingService(app_config)


@pytest.fixture
def write_config(tmp_path):
    """Write YAML files into a temporary config dir and load it."""
    def _write(**files: dict) -> Config:
        for name, data in files.items():
            with open(tmp_path / f"{name}.yml", "w") as f:
                yaml.safe_dump(data, f)
        return Config(config_dir=tmp_path)

    return _write


@pytest.fixture
def sample_shipping():
    """ProductShippingDetails for each shipping type."""
    return {
        "calculated": ProductShippingDetails(
            shipping_type=ShippingType.CALCULATED, weight=Decimal("2"), weight_unit="kg"
        ),
        "flat": ProductShippingDetails(
            shipping_type=ShippingType.FLAT, flat_rate=Decimal("8.5"), weight=Decimal("0.6")
        ),
        "free": ProductShippingDetails(shipping_type=ShippingType.FREE, weight=Decimal("0.4")),
        "manual": ProductShippingDetails(
            shipping_type=ShippingType.MANUAL, weight=Decimal("28"), lead_time=21
        ),
    }


@pytest.fixture
def sample_products(sample_shipping):
    """Catalog products sold from the US."""
    return {
        "board": Product(
            id="walnut-board",
            name="Walnut Cutting Board",
            storefront="oak-and-iron",
            price=Decimal("89.00"),
            seller_country="US",
            shipping=sample_shipping["calculated"],
        ),
        "bench": Product(
            id="oak-bench",
            name="Reclaimed Oak Bench",
            storefront="oak-and-iron",
            price=Decimal("640.00"),
            seller_country="US",
            shipping=sample_shipping["manual"],
        ),
        "mug": Product(
            id="stoneware-mug",
            name="Speckled Stoneware Mug",
            storefront="oak-and-iron",
            price=Decimal("34.00"),
            seller_country="US",
            shipping=sample_shipping["free"],
        ),
    }


@pytest.fixture
def bundled_catalog_path():
    return Path(__file__).parent.parent / "craftsmatch" / "config" / "catalog.yml"
