"""Tests for the dependency-injection container."""

import pytest
from dependency_injector import errors

from craftsmatch.bot.response_formatter import ResponseFormatter
from craftsmatch.core.container import Container
from craftsmatch.services.carriers import get_carrier_service
from craftsmatch.services.shipping import ShippingService, get_shipping_service


def test_container_wires_services(app_config):
    container = Container(app_config=app_config)

    service = container.shipping_service()

    assert isinstance(service, ShippingService)
    assert service.config is app_config
    assert container.shipping_service() is service
    assert get_shipping_service(app_config) is service


def test_container_shares_module_instances(app_config):
    container = Container(app_config=app_config)

    assert container.carrier_service() is get_carrier_service()
    assert isinstance(container.response_formatter(), ResponseFormatter)
    assert len(container.product_store().list_products()) == 5


def test_container_requires_config():
    container = Container()

    with pytest.raises(errors.Error):
        container.shipping_service()
