"""Interactive shipping calculator session.

Keeps the per-chat calculator state (destination country, shipping method,
quantity) and recomputes the shipping estimate on every change, pushing it
to the checkout through ``on_estimate_update``.
"""

import logging
from collections.abc import Callable
from decimal import Decimal

from ..models import Product, ShippingEstimate, ShippingMethod
from ..services.shipping import (
    ShippingError,
    ShippingMethodUnavailableError,
    ShippingService,
)
from .messages import (
    SHIPPING_SELECT_COUNTRY,
    SHIPPING_SELECT_METHOD,
    SHIPPING_UNAVAILABLE,
)
from .types import CalculatorSnapshot

logger = logging.getLogger(__name__)

EstimateCallback = Callable[[ShippingEstimate], None]


class ShippingCalculatorSession:
    """Shipping calculator state for one product.

    Attributes:
        product: Product being quoted.
        country: Selected destination, None until set.
        method: Selected shipping method, None until set.
        quantity: Units ordered.
        available_methods: Methods offered for the selected country.
        estimate: Latest estimate, unknown until country and method are set.
        error: Message of the last failed calculation.
    """

    def __init__(
        self,
        product: Product,
        shipping_service: ShippingService,
        quantity: int = 1,
        on_estimate_update: EstimateCallback | None = None,
    ):
        self.product = product
        self.shipping_service = shipping_service
        self.on_estimate_update = on_estimate_update

        self.country: str | None = None
        self.method: ShippingMethod | None = None
        self.quantity = quantity
        self.available_methods: list[ShippingMethod] = []
        self.estimate = ShippingEstimate.unknown(SHIPPING_SELECT_COUNTRY)
        self.error: str | None = None

    @property
    def order_value(self) -> Decimal:
        return self.product.price * self.quantity

    def set_country(self, country: str) -> ShippingEstimate:
        """Select the destination country and re-resolve shipping methods.

        A previously selected method that the new route does not offer is
        cleared; standard shipping is then preselected when offered.
        """
        self.country = self.shipping_service.zones.normalize_country(country) or None
        if self.country is None:
            self.available_methods = []
            self.method = None
            return self._recompute()

        self.available_methods = self.shipping_service.get_available_shipping_methods(
            self.country, self.product.seller_country, self.product.shipping
        )

        if self.method not in self.available_methods:
            self.method = None
        if self.method is None and self.available_methods:
            if ShippingMethod.STANDARD in self.available_methods:
                self.method = ShippingMethod.STANDARD
            else:
                self.method = self.available_methods[0]

        return self._recompute()

    def set_method(self, method: ShippingMethod | str) -> ShippingEstimate:
        """Select a shipping method among the available ones.

        Raises:
            ShippingMethodUnavailableError: Method not offered for the route.
        """
        try:
            selected = ShippingMethod(str(method).strip().lower())
        except ValueError:
            selected = None

        if selected is None or selected not in self.available_methods:
            raise ShippingMethodUnavailableError(
                f"Shipping method '{method}' is not available for this destination"
            )

        self.method = selected
        return self._recompute()

    def set_quantity(self, quantity: int) -> ShippingEstimate:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        self.quantity = quantity
        return self._recompute()

    def snapshot(self) -> CalculatorSnapshot:
        """Return the session state for rendering."""
        return {
            "product": self.product,
            "country": self.country,
            "method": self.method,
            "quantity": self.quantity,
            "available_methods": list(self.available_methods),
            "estimate": self.estimate,
            "error": self.error,
        }

    def _recompute(self) -> ShippingEstimate:
        self.error = None

        if self.country is None:
            estimate = ShippingEstimate.unknown(SHIPPING_SELECT_COUNTRY)
        elif not self.available_methods:
            estimate = ShippingEstimate.unknown(SHIPPING_UNAVAILABLE)
        elif self.method is None:
            estimate = ShippingEstimate.unknown(SHIPPING_SELECT_METHOD)
        else:
            try:
                estimate = self.shipping_service.quote_shipping(
                    self.product.shipping,
                    self.country,
                    self.product.seller_country,
                    self.method,
                    order_value=self.order_value,
                    quantity=self.quantity,
                )
            except ShippingError as e:
                logger.warning(f"Shipping calculation failed for {self.product.id}: {e}")
                self.error = str(e)
                estimate = ShippingEstimate.unknown(str(e))

        self.estimate = estimate
        if self.on_estimate_update:
            self.on_estimate_update(estimate)
        return estimate
