"""Shipping cost estimation service.

Resolves the shipping methods offered for a route, prices a shipment from
the zone/method rate table and the product's weight and dimensions, and
estimates transit time. Rates and transit times come from
shipping_rates.yml; zones from shipping_zones.yml.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from ..config import Config
from ..models import (
    CENT,
    CostEstimate,
    DeliveryEstimate,
    ProductShippingDetails,
    ShippingEstimate,
    ShippingMethod,
    ShippingType,
    ShippingZone,
)
from .zones import ZoneResolver

logger = logging.getLogger(__name__)

METHOD_ORDER = (ShippingMethod.STANDARD, ShippingMethod.EXPRESS, ShippingMethod.OVERNIGHT)

SHIPPING_TO_BE_ARRANGED = "Shipping will be arranged with the seller after purchase."


class ShippingError(Exception):
    """Base class for shipping calculation failures shown to the user."""


class ShippingUnavailableError(ShippingError):
    """The product cannot be shipped to the destination."""


class ShippingRateNotFoundError(ShippingError):
    """The rate table has no entry for the zone/method pair."""


class ManualShippingError(ShippingError):
    """The product's shipping is priced by the seller after purchase."""


class ShippingMethodUnavailableError(ShippingError):
    """The requested method is not offered for the route."""


class ShippingService:
    def __init__(self, config: Config):
        self.config = config
        self.zones = ZoneResolver(config)

    def get_available_shipping_methods(
        self,
        destination_country: str,
        seller_country: str,
        product: ProductShippingDetails,
    ) -> list[ShippingMethod]:
        """List the shipping methods a buyer can pick for a route.

        Manual products always offer only the manual method. Otherwise an
        unsupported or restricted destination yields an empty list, which
        callers render as "shipping unavailable".

        Args:
            destination_country: Buyer's country code.
            seller_country: Seller's country code.
            product: Product shipping metadata.

        Returns:
            Available methods, fastest last.
        """
        if product.shipping_type == ShippingType.MANUAL:
            return [ShippingMethod.MANUAL]

        destination = self.zones.normalize_country(destination_country)
        if destination in self.zones.normalize_countries(product.restricted_countries):
            return []

        zone = self.zones.get_shipping_zone(destination, seller_country)
        if zone is None:
            return []

        if product.shipping_type == ShippingType.FREE:
            return list(METHOD_ORDER)

        methods = [ShippingMethod.STANDARD]
        if zone in (ShippingZone.DOMESTIC, ShippingZone.REGIONAL):
            methods.append(ShippingMethod.EXPRESS)
        if zone == ShippingZone.DOMESTIC:
            methods.append(ShippingMethod.OVERNIGHT)
        return methods

    def calculate_shipping_cost(
        self,
        product: ProductShippingDetails,
        destination_country: str,
        seller_country: str,
        shipping_method: ShippingMethod | str,
        order_value: Decimal | int | float = 0,
        quantity: int = 1,
    ) -> Decimal:
        """Calculate the shipping price for an order line.

        Free products cost nothing and flat products cost their flat rate
        wherever they go. Calculated products are priced as
        ``base_rate + per_kg_rate * chargeable weight`` where the chargeable
        unit weight is the larger of actual and volumetric weight and every
        unit after the first is charged at ``additional_unit_factor``.

        Args:
            product: Product shipping metadata.
            destination_country: Buyer's country code.
            seller_country: Seller's country code.
            shipping_method: Selected shipping method.
            order_value: Order value checked against the free-shipping threshold.
            quantity: Number of units shipped together.

        Returns:
            Shipping price rounded half up to cents.

        Raises:
            ManualShippingError: Shipping is arranged after purchase.
            ShippingUnavailableError: Destination is restricted or unsupported.
            ShippingRateNotFoundError: No rate for the zone/method pair.
        """
        if quantity < 1:
            raise ValueError("quantity must be at least 1")

        if product.shipping_type == ShippingType.FREE:
            return Decimal("0.00")

        if product.shipping_type == ShippingType.FLAT:
            return self._round(product.flat_rate)

        if product.shipping_type == ShippingType.MANUAL:
            raise ManualShippingError(SHIPPING_TO_BE_ARRANGED)

        destination = self.zones.normalize_country(destination_country)
        if destination in self.zones.normalize_countries(product.restricted_countries):
            raise ShippingUnavailableError(
                f"Shipping to {destination} is not available for this product"
            )

        custom_rate = self._custom_rate(product, destination)
        if custom_rate is not None:
            return self._round(custom_rate * quantity)

        threshold = self._free_shipping_threshold(product)
        if threshold is not None and Decimal(str(order_value)) >= threshold:
            logger.debug(f"Order value {order_value} reached free shipping threshold {threshold}")
            return Decimal("0.00")

        zone = self.zones.get_shipping_zone(destination, seller_country)
        if zone is None:
            raise ShippingUnavailableError(
                f"Shipping from {seller_country or 'unknown'} to {destination or 'unknown'} is not supported"
            )

        method = str(shipping_method).lower()
        rate = self.config.shipping_rates.get(zone.value, {}).get(method)
        if rate is None:
            raise ShippingRateNotFoundError(
                f"No {method} shipping rate for {zone.value} deliveries"
            )

        chargeable_weight = self._chargeable_weight(product, quantity)
        base_rate = self._to_decimal(rate.get("base_rate", 0))
        per_kg_rate = self._to_decimal(rate.get("per_kg_rate", 0))

        cost = self._round(base_rate + per_kg_rate * chargeable_weight)
        logger.debug(
            f"Shipping {zone.value}/{method}: base {base_rate} + "
            f"{per_kg_rate}/kg x {chargeable_weight}kg = {cost}"
        )
        return cost

    def estimate_delivery_time(
        self,
        destination_country: str,
        seller_country: str,
        shipping_method: ShippingMethod | str,
        lead_time_days: int = 0,
    ) -> DeliveryEstimate:
        """Estimate the delivery range for a route.

        Unknown zone/method combinations fall back to the configured
        conservative range instead of failing.

        Args:
            destination_country: Buyer's country code.
            seller_country: Seller's country code.
            shipping_method: Selected shipping method.
            lead_time_days: Production days added to both bounds.

        Returns:
            DeliveryEstimate with min_days <= max_days.
        """
        zone = self.zones.get_shipping_zone(destination_country, seller_country)
        method = str(shipping_method).lower()

        timing = None
        if zone is not None:
            timing = self.config.delivery_times.get(zone.value, {}).get(method)

        if timing is None:
            min_days = self.config.shipping.fallback_min_days
            max_days = self.config.shipping.fallback_max_days
        else:
            min_days = int(timing["min_days"])
            max_days = int(timing["max_days"])

        return DeliveryEstimate(
            min_days=min_days + lead_time_days,
            max_days=max(min_days, max_days) + lead_time_days,
        )

    def quote_shipping(
        self,
        product: ProductShippingDetails,
        destination_country: str,
        seller_country: str,
        shipping_method: ShippingMethod | str,
        order_value: Decimal | int | float = 0,
        quantity: int = 1,
    ) -> ShippingEstimate:
        """Combine cost and delivery time into a checkout estimate.

        Manual shipping yields an unknown estimate with a "to be arranged"
        message; calculation errors propagate to the caller.
        """
        delivery = self.estimate_delivery_time(
            destination_country, seller_country, shipping_method, product.lead_time
        )
        try:
            amount = self.calculate_shipping_cost(
                product,
                destination_country,
                seller_country,
                shipping_method,
                order_value=order_value,
                quantity=quantity,
            )
        except ManualShippingError as e:
            return ShippingEstimate.unknown(message=str(e), delivery=delivery)

        cost = CostEstimate.from_amount(amount, product.currency or self.config.shipping.currency)
        return ShippingEstimate.from_cost(cost, delivery)

    def calculate_volumetric_weight(
        self, length_cm: Decimal, width_cm: Decimal, height_cm: Decimal
    ) -> Decimal:
        """Volumetric weight in kg: L x W x H (cm) / divisor."""
        divisor = self._to_decimal(self.config.shipping.volumetric_divisor)
        return length_cm * width_cm * height_cm / divisor

    def _chargeable_weight(self, product: ProductShippingDetails, quantity: int) -> Decimal:
        """Billable weight for the order line in kg."""
        unit_weight = product.weight_kg
        if unit_weight is None:
            unit_weight = self._to_decimal(self.config.shipping.default_weight_kg)

        if product.dimensions is not None:
            volumetric = self.calculate_volumetric_weight(*product.dimensions.to_cm())
            unit_weight = max(unit_weight, volumetric)

        factor = self._to_decimal(self.config.shipping.additional_unit_factor)
        return unit_weight + unit_weight * factor * (quantity - 1)

    def _custom_rate(self, product: ProductShippingDetails, destination: str) -> Decimal | None:
        """Per-unit custom rate for the destination, keys matched through aliases."""
        for country, rate in product.custom_shipping_rates.items():
            if self.zones.normalize_country(country) == destination:
                return rate
        return None

    def _free_shipping_threshold(self, product: ProductShippingDetails) -> Decimal | None:
        if product.free_shipping_threshold is not None:
            return product.free_shipping_threshold
        threshold = self.config.shipping.free_shipping_threshold
        return None if threshold is None else self._to_decimal(threshold)

    def _round(self, value: Decimal | None) -> Decimal:
        return self._to_decimal(value).quantize(CENT, ROUND_HALF_UP)

    def _to_decimal(self, value: object) -> Decimal:
        """Convert a config or model value to Decimal."""
        if isinstance(value, Decimal):
            return value
        if value is None:
            return Decimal("0")
        return Decimal(str(value))


_shipping_service: ShippingService | None = None


def get_shipping_service(config: Config | None = None) -> ShippingService:
    """Return the lazily created shipping service."""
    global _shipping_service
    if config is None:
        from ..config import config as global_config
        config = global_config

    if _shipping_service is None or _shipping_service.config is not config:
        _shipping_service = ShippingService(config)
    return _shipping_service


def get_available_shipping_methods(
    destination_country: str, seller_country: str, product: ProductShippingDetails
) -> list[ShippingMethod]:
    """Functional wrapper around the shared service."""
    return get_shipping_service().get_available_shipping_methods(
        destination_country, seller_country, product
    )


def calculate_shipping_cost(
    product: ProductShippingDetails,
    destination_country: str,
    seller_country: str,
    shipping_method: ShippingMethod | str = ShippingMethod.STANDARD,
    order_value: Decimal | int | float = 0,
    quantity: int = 1,
) -> Decimal:
    """Functional wrapper around the shared service."""
    return get_shipping_service().calculate_shipping_cost(
        product,
        destination_country,
        seller_country,
        shipping_method,
        order_value=order_value,
        quantity=quantity,
    )


def estimate_delivery_time(
    destination_country: str,
    seller_country: str,
    shipping_method: ShippingMethod | str,
    lead_time_days: int = 0,
) -> DeliveryEstimate:
    """Functional wrapper around the shared service."""
    return get_shipping_service().estimate_delivery_time(
        destination_country, seller_country, shipping_method, lead_time_days
    )
