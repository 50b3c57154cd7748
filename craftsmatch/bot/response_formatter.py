"""Response formatting for bot messages.

Turns calculator state, checkout summaries, carrier quotes, tracking data and
storefront details into the plain-text replies sent to users.
"""

import logging

from ..models import (
    CarrierRate,
    CheckoutSummary,
    DeliveryEstimate,
    EstimateStatus,
    Product,
    ShippingEstimate,
    Storefront,
    TrackingInfo,
)
from ..services.checkout import build_checkout_summary
from ..services.storefront import resolve_theme
from .messages import (
    CARRIER_RATE_LINE,
    CARRIERS_HEADER,
    CATALOG_EMPTY,
    CATALOG_HEADER,
    CATALOG_LINE,
    DELIVERY_RANGE_LINE,
    DELIVERY_SINGLE_LINE,
    DESTINATION_LINE,
    ERROR_LINE,
    ESTIMATE_DISCLAIMER,
    METHOD_LINE,
    METHODS_LINE,
    PRICE_LINE,
    PRODUCT_HEADER,
    SEPARATOR_LINE,
    SHIPPING_COST_LINE,
    SHIPPING_FREE_LINE,
    SHIPPING_UNKNOWN_LINE,
    STORE_HEADER,
    STORE_LOCATION_LINE,
    STORE_PRODUCTS_LINE,
    STORE_THEME_LINE,
    SUBTOTAL_LINE,
    TOTAL_LINE,
    TOTAL_PENDING_LINE,
    TRACKING_ETA_LINE,
    TRACKING_EVENT_LINE,
    TRACKING_HEADER,
)
from .types import CalculatorSnapshot

logger = logging.getLogger(__name__)


class ResponseFormatter:
    """Formats bot responses for the shipping calculator and catalog."""

    def format_catalog(self, products: list[Product]) -> str:
        if not products:
            return CATALOG_EMPTY

        lines = [CATALOG_HEADER]
        for product in products:
            lines.append(
                CATALOG_LINE.format(product_id=product.id, name=product.name, price=product.price)
            )
        return "\n".join(lines)

    def format_calculator(
        self, snapshot: CalculatorSnapshot, summary: CheckoutSummary | None = None
    ) -> str:
        """Format the calculator state with the checkout breakdown.

        Args:
            snapshot: State returned by ShippingCalculatorSession.snapshot().
            summary: Checkout summary pushed by the session callback, built
                from the snapshot when missing.

        Returns:
            Message listing destination, methods, shipping and totals.
        """
        product = snapshot["product"]
        estimate = snapshot["estimate"]
        quantity = snapshot["quantity"]

        lines = [
            PRODUCT_HEADER.format(name=product.name),
            PRICE_LINE.format(price=product.price, quantity=quantity),
        ]

        if snapshot["country"]:
            lines.append(DESTINATION_LINE.format(country=snapshot["country"]))
        if snapshot["available_methods"]:
            methods = ", ".join(str(method) for method in snapshot["available_methods"])
            lines.append(METHODS_LINE.format(methods=methods))
        if snapshot["method"]:
            lines.append(METHOD_LINE.format(method=snapshot["method"]))

        lines.append(self.format_shipping_line(estimate))
        if estimate.delivery:
            lines.append(self.format_delivery(estimate.delivery))

        if snapshot["error"]:
            lines.append(ERROR_LINE.format(error=snapshot["error"]))
        elif not estimate.is_known and estimate.message:
            lines.append(estimate.message)

        if summary is None:
            summary = build_checkout_summary(
                product.price, quantity, estimate, product.shipping.currency
            )
        lines.append(SEPARATOR_LINE)
        lines.append(SUBTOTAL_LINE.format(subtotal=summary.subtotal))
        if summary.total is None:
            lines.append(TOTAL_PENDING_LINE.format(subtotal=summary.subtotal))
        else:
            lines.append(TOTAL_LINE.format(total=summary.total))

        if estimate.is_known:
            lines.append("")
            lines.append(ESTIMATE_DISCLAIMER)

        return "\n".join(lines)

    def format_shipping_line(self, estimate: ShippingEstimate) -> str:
        if estimate.status == EstimateStatus.FREE:
            return SHIPPING_FREE_LINE
        if estimate.status == EstimateStatus.AMOUNT and estimate.cost is not None:
            return SHIPPING_COST_LINE.format(amount=estimate.cost.amount)
        return SHIPPING_UNKNOWN_LINE

    def format_delivery(self, delivery: DeliveryEstimate) -> str:
        if delivery.min_days == delivery.max_days:
            return DELIVERY_SINGLE_LINE.format(days=delivery.min_days)
        return DELIVERY_RANGE_LINE.format(min_days=delivery.min_days, max_days=delivery.max_days)

    def format_carrier_rates(self, country: str, rates: list[CarrierRate]) -> str:
        lines = [CARRIERS_HEADER.format(country=country)]
        for rate in rates:
            lines.append(
                CARRIER_RATE_LINE.format(
                    carrier=rate.carrier,
                    service=rate.service,
                    rate=rate.rate,
                    days=rate.estimated_days,
                )
            )
        return "\n".join(lines)

    def format_tracking(self, tracking_number: str, info: TrackingInfo) -> str:
        lines = [
            TRACKING_HEADER.format(tracking_number=tracking_number, status=info.status),
            TRACKING_ETA_LINE.format(date=info.estimated_delivery.isoformat()),
        ]
        for event in info.events:
            lines.append(
                TRACKING_EVENT_LINE.format(
                    timestamp=event.timestamp.strftime("%Y-%m-%d %H:%M"),
                    location=event.location,
                    description=event.description,
                )
            )
        return "\n".join(lines)

    def format_storefront(self, storefront: Storefront, products: list[Product]) -> str:
        theme = resolve_theme(storefront.customization)
        lines = [STORE_HEADER.format(name=storefront.name)]
        if storefront.description:
            lines.append(storefront.description)
        if storefront.location:
            lines.append(STORE_LOCATION_LINE.format(location=storefront.location))
        lines.append(
            STORE_THEME_LINE.format(
                primary=theme.primary_color,
                secondary=theme.secondary_color,
                accent=theme.accent_color,
                font=theme.font_family,
            )
        )
        if products:
            lines.append(
                STORE_PRODUCTS_LINE.format(products=", ".join(product.id for product in products))
            )
        return "\n".join(lines)


# Global response formatter instance
response_formatter = ResponseFormatter()
