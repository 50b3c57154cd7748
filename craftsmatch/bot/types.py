"""Typed structures shared across bot components."""

from __future__ import annotations

from typing import TypedDict

from ..models import Product, ShippingEstimate, ShippingMethod


class CalculatorSnapshot(TypedDict):
    """Shipping calculator state handed to the response formatter."""

    product: Product
    country: str | None
    method: ShippingMethod | None
    quantity: int
    available_methods: list[ShippingMethod]
    estimate: ShippingEstimate
    error: str | None
