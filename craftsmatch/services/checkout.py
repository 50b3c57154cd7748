"""Checkout price summary.

Folds the shipping estimate into the order total. An unknown shipping
estimate leaves the total open rather than counting shipping as free.
"""

from decimal import ROUND_HALF_UP, Decimal

from ..models import CENT, CheckoutSummary, ShippingEstimate


def build_checkout_summary(
    unit_price: Decimal,
    quantity: int,
    shipping: ShippingEstimate,
    currency: str = "USD",
) -> CheckoutSummary:
    """Build the price breakdown for an order line.

    Args:
        unit_price: Product price per unit.
        quantity: Number of units ordered.
        shipping: Current shipping estimate.
        currency: ISO currency code.

    Returns:
        CheckoutSummary whose total is None while shipping is unknown.
    """
    subtotal = (Decimal(unit_price) * quantity).quantize(CENT, ROUND_HALF_UP)

    total = None
    if shipping.is_known and shipping.cost is not None:
        total = (subtotal + shipping.cost.amount).quantize(CENT, ROUND_HALF_UP)

    return CheckoutSummary(
        unit_price=Decimal(unit_price).quantize(CENT, ROUND_HALF_UP),
        quantity=quantity,
        subtotal=subtotal,
        shipping=shipping,
        total=total,
        currency=currency,
    )
