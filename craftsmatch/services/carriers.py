"""Carrier integration service.

Placeholder carrier client returning canned carrier lists, rates, labels and
tracking data. Methods are coroutines so call sites do not change once real
carrier APIs are wired in.
"""

import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ..models import (
    CENT,
    CarrierRate,
    PackageDetails,
    ShippingAddress,
    ShippingLabel,
    TrackingEvent,
    TrackingInfo,
)

logger = logging.getLogger(__name__)

DEFAULT_CARRIERS = ["Standard Post", "Express Shipping", "Premium Courier"]
DOMESTIC_ONLY_CARRIERS = ["Local Delivery", "Same-Day Courier"]

LABEL_PLACEHOLDER_URL = "https://placeholder.com/shipping-label.pdf"

# (carrier, service, domestic rate, international rate, domestic days, international days)
_CARRIER_TABLE = [
    ("Standard Post", "Ground", Decimal("12.99"), Decimal("29.99"), 5, 14),
    ("Express Shipping", "Priority", Decimal("24.99"), Decimal("49.99"), 2, 7),
    ("Premium Courier", "Overnight", Decimal("39.99"), Decimal("89.99"), 1, 3),
]

PER_KG_SURCHARGE = Decimal("2")
TRACKING_ETA_DAYS = 5


class CarrierService:
    """Mock carrier client."""

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
    ):
        self._clock = clock or (lambda: datetime.now(UTC))
        self._rng = rng or random.Random()

    async def get_available_carriers(self, origin_country: str, destination_country: str) -> list[str]:
        """List carriers serving a route; domestic routes get local couriers too."""
        if origin_country.upper() == destination_country.upper():
            return DEFAULT_CARRIERS + DOMESTIC_ONLY_CARRIERS
        return list(DEFAULT_CARRIERS)

    async def get_carrier_rates(
        self,
        origin_country: str,
        destination_country: str,
        package: PackageDetails,
    ) -> list[CarrierRate]:
        """Quote every default carrier for a package.

        Args:
            origin_country: Sender country code.
            destination_country: Recipient country code.
            package: Package dimensions and weight.

        Returns:
            One rate per carrier, base price plus a per-kg surcharge.
        """
        is_domestic = origin_country.upper() == destination_country.upper()
        rates = []
        for carrier, service, domestic, international, domestic_days, intl_days in _CARRIER_TABLE:
            base = domestic if is_domestic else international
            rates.append(
                CarrierRate(
                    carrier=carrier,
                    service=service,
                    rate=(base + package.weight * PER_KG_SURCHARGE).quantize(CENT, ROUND_HALF_UP),
                    estimated_days=domestic_days if is_domestic else intl_days,
                    tracking_available=True,
                )
            )
        return rates

    async def create_shipping_label(
        self,
        origin: ShippingAddress,
        destination: ShippingAddress,
        package: PackageDetails,
        carrier: str,
        service: str,
    ) -> ShippingLabel:
        """Create a label and tracking number for a shipment."""
        timestamp = str(int(self._clock().timestamp() * 1000))
        tracking_number = f"{carrier[:2].upper()}{timestamp[5:]}{self._rng.randrange(1000)}"
        logger.info(f"Created {carrier} {service} label {tracking_number}")
        return ShippingLabel(
            tracking_number=tracking_number,
            label_url=LABEL_PLACEHOLDER_URL,
            carrier=carrier,
            service=service,
        )

    async def get_tracking_info(self, tracking_number: str, carrier: str) -> TrackingInfo:
        """Return the tracking status of a shipment."""
        now = self._clock()
        return TrackingInfo(
            status="In Transit",
            estimated_delivery=(now + timedelta(days=TRACKING_ETA_DAYS)).date(),
            current_location="Distribution Center",
            events=[
                TrackingEvent(
                    timestamp=now,
                    location="Distribution Center",
                    description="Package is being processed",
                ),
                TrackingEvent(
                    timestamp=now - timedelta(days=1),
                    location="Origin Facility",
                    description="Package received",
                ),
            ],
        )


_carrier_service: CarrierService | None = None


def get_carrier_service() -> CarrierService:
    """Return the lazily created carrier service."""
    global _carrier_service
    if _carrier_service is None:
        _carrier_service = CarrierService()
    return _carrier_service
