"""Tests for the carrier integration service."""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from craftsmatch.models import PackageDetails, ShippingAddress
from craftsmatch.services.carriers import (
    DEFAULT_CARRIERS,
    LABEL_PLACEHOLDER_URL,
    CarrierService,
    get_carrier_service,
)

FIXED_TIME = datetime(2025, 1, 2, 15, 45, tzinfo=UTC)


class _StubRandom:
    def randrange(self, stop: int) -> int:
        return 42


@pytest.fixture
def carrier_service():
    return CarrierService(clock=lambda: FIXED_TIME, rng=_StubRandom())


@pytest.fixture
def package():
    return PackageDetails(
        length=Decimal("45"), width=Decimal("30"), height=Decimal("4"), weight=Decimal("2")
    )


def _address(country: str) -> ShippingAddress:
    return ShippingAddress(
        name="Test Buyer", street1="1 Main St", city="Springfield", postal_code="12345", country=country
    )


@pytest.mark.asyncio
async def test_domestic_route_adds_local_carriers(carrier_service):
    carriers = await carrier_service.get_available_carriers("US", "us")

    assert carriers[:3] == DEFAULT_CARRIERS
    assert "Local Delivery" in carriers
    assert "Same-Day Courier" in carriers


@pytest.mark.asyncio
async def test_international_route_default_carriers(carrier_service):
    assert await carrier_service.get_available_carriers("US", "DE") == DEFAULT_CARRIERS


@pytest.mark.asyncio
async def test_domestic_rates(carrier_service, package):
    rates = await carrier_service.get_carrier_rates("US", "US", package)

    assert [(r.carrier, r.service) for r in rates] == [
        ("Standard Post", "Ground"),
        ("Express Shipping", "Priority"),
        ("Premium Courier", "Overnight"),
    ]
    assert [r.rate for r in rates] == [Decimal("16.99"), Decimal("28.99"), Decimal("43.99")]
    assert [r.estimated_days for r in rates] == [5, 2, 1]
    assert all(r.tracking_available for r in rates)


@pytest.mark.asyncio
async def test_international_rates(carrier_service, package):
    rates = await carrier_service.get_carrier_rates("US", "DE", package)

    assert [r.rate for r in rates] == [Decimal("33.99"), Decimal("53.99"), Decimal("93.99")]
    assert [r.estimated_days for r in rates] == [14, 7, 3]


@pytest.mark.asyncio
async def test_create_label(carrier_service, package):
    label = await carrier_service.create_shipping_label(
        _address("US"), _address("DE"), package, "Express Shipping", "Priority"
    )

    timestamp = str(int(FIXED_TIME.timestamp() * 1000))
    assert label.tracking_number == f"EX{timestamp[5:]}42"
    assert label.label_url == LABEL_PLACEHOLDER_URL
    assert (label.carrier, label.service) == ("Express Shipping", "Priority")


@pytest.mark.asyncio
async def test_tracking_info(carrier_service):
    info = await carrier_service.get_tracking_info("EX123", "Express Shipping")

    assert info.status == "In Transit"
    assert info.estimated_delivery == date(2025, 1, 7)
    assert info.current_location == "Distribution Center"
    assert [event.location for event in info.events] == ["Distribution Center", "Origin Facility"]
    assert info.events[0].timestamp > info.events[1].timestamp


def test_carrier_service_singleton():
    assert get_carrier_service() is get_carrier_service()
