"""Dependency-injection container.

Wires the services together from a single Config instance. Providers reuse
the lazy module-level getters so the bot handlers and the container share
the same service instances.
"""

from dependency_injector import containers, providers

from craftsmatch.bot.response_formatter import ResponseFormatter
from craftsmatch.config import Config
from craftsmatch.services.carriers import get_carrier_service
from craftsmatch.services.catalog import get_product_store
from craftsmatch.services.shipping import get_shipping_service


class Container(containers.DeclarativeContainer):
    """DI container for the application."""

    app_config = providers.Dependency(instance_of=Config)

    # Services
    shipping_service = providers.Singleton(get_shipping_service, config=app_config)
    product_store = providers.Singleton(get_product_store, config=app_config)
    carrier_service = providers.Singleton(get_carrier_service)

    # Bot components
    response_formatter = providers.Singleton(ResponseFormatter)
