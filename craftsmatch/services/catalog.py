"""Product and storefront catalog.

Provides the read-only product lookups the shipping calculator needs. The
store implementation is chosen once from configuration; the bundled YAML
catalog stands in for the marketplace database.
"""

import logging
from pathlib import Path
from typing import Protocol

import yaml

from ..config import Config
from ..models import Product, Storefront

logger = logging.getLogger(__name__)


class ProductStore(Protocol):
    """Read access to catalog data."""

    def get_product(self, product_id: str) -> Product | None: ...

    def list_products(self) -> list[Product]: ...

    def get_storefront(self, slug: str) -> Storefront | None: ...


class InMemoryProductStore:
    """Catalog held in dictionaries."""

    def __init__(
        self,
        products: list[Product] | None = None,
        storefronts: list[Storefront] | None = None,
    ):
        self._products = {product.id: product for product in products or []}
        self._storefronts = {store.slug: store for store in storefronts or []}

    @classmethod
    def from_yaml(cls, path: Path) -> "InMemoryProductStore":
        """Load a catalog file.

        Products inherit their seller country from the owning storefront.

        Args:
            path: Catalog YAML with ``storefronts`` and ``products`` lists.

        Returns:
            Populated store.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        storefronts = [Storefront(**raw) for raw in data.get("storefronts", [])]
        countries = {store.slug: store.country for store in storefronts}

        products = []
        for raw in data.get("products", []):
            raw = dict(raw)
            raw.setdefault("seller_country", countries.get(raw.get("storefront"), "US"))
            products.append(Product(**raw))

        logger.info(f"Loaded {len(products)} products and {len(storefronts)} storefronts from {path}")
        return cls(products, storefronts)

    def get_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def list_products(self) -> list[Product]:
        return list(self._products.values())

    def get_storefront(self, slug: str) -> Storefront | None:
        return self._storefronts.get(slug)


def create_product_store(config: Config) -> ProductStore:
    """Build the store selected by ``CATALOG_BACKEND``.

    Raises:
        ValueError: Unknown backend name.
    """
    backend = config.catalog.backend.lower()
    if backend == "yaml":
        return InMemoryProductStore.from_yaml(config.catalog_path)
    if backend == "memory":
        return InMemoryProductStore()
    raise ValueError(f"Unknown catalog backend: {config.catalog.backend}")


_product_store: ProductStore | None = None


def get_product_store(config: Config | None = None) -> ProductStore:
    """Return the lazily created product store."""
    global _product_store
    if config is None:
        from ..config import config as global_config
        config = global_config

    if _product_store is None:
        _product_store = create_product_store(config)
    return _product_store
