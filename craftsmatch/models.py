"""Data models for the CraftsMatch toolkit.

Defines Pydantic models for the structures used throughout the application:
product shipping metadata, shipping estimates, checkout summaries, carrier
data and storefront appearance. All models include validation and type
checking; money is carried as Decimal and rounded to cents.
"""

import re
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

CENT = Decimal("0.01")

_DIMENSIONS_RE = re.compile(
    r"^\s*([\d.]+)\s*[x×]\s*([\d.]+)\s*[x×]\s*([\d.]+)\s*(cm|in)?\s*$",
    re.IGNORECASE,
)
_HEX_COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
_SLUG_RE = re.compile(r"^[a-z0-9-]+$")

_KG_PER_UNIT = {
    "kg": Decimal("1"),
    "g": Decimal("0.001"),
    "lb": Decimal("0.45359237"),
    "oz": Decimal("0.028349523125"),
}
_CM_PER_UNIT = {"cm": Decimal("1"), "in": Decimal("2.54")}


class ShippingType(StrEnum):
    """How a product's shipping price is determined."""

    FLAT = "flat"
    CALCULATED = "calculated"
    FREE = "free"
    MANUAL = "manual"


class ShippingMethod(StrEnum):
    """Shipping speed offered at checkout."""

    STANDARD = "standard"
    EXPRESS = "express"
    OVERNIGHT = "overnight"
    MANUAL = "manual"


class ShippingZone(StrEnum):
    """Pricing tier derived from the seller/destination country pair."""

    DOMESTIC = "domestic"
    REGIONAL = "regional"
    INTERNATIONAL = "international"


class EstimateStatus(StrEnum):
    """Outcome of a shipping quote."""

    UNKNOWN = "unknown"
    FREE = "free"
    AMOUNT = "amount"


class Dimensions(BaseModel):
    """Package dimensions.

    Attributes:
        length: Package length.
        width: Package width.
        height: Package height.
        unit: "cm" or "in".
    """

    length: Decimal = Field(gt=0)
    width: Decimal = Field(gt=0)
    height: Decimal = Field(gt=0)
    unit: str = "cm"

    @field_validator("unit")
    @classmethod
    def _check_unit(cls, value: str) -> str:
        unit = value.lower()
        if unit not in _CM_PER_UNIT:
            raise ValueError(f"Unsupported dimension unit: {value}")
        return unit

    @classmethod
    def parse(cls, text: str) -> "Dimensions":
        """Parse the "10x20x30 cm" form stored on product records."""
        match = _DIMENSIONS_RE.match(text)
        if not match:
            raise ValueError(f"Cannot parse dimensions: {text!r}")
        length, width, height, unit = match.groups()
        return cls(length=length, width=width, height=height, unit=unit or "cm")

    def to_cm(self) -> tuple[Decimal, Decimal, Decimal]:
        factor = _CM_PER_UNIT[self.unit]
        return self.length * factor, self.width * factor, self.height * factor


class ProductShippingDetails(BaseModel):
    """Shipping metadata of a product, read-only input to the calculator.

    Attributes:
        weight: Unit weight in ``weight_unit``, None if not recorded.
        weight_unit: One of kg, g, lb, oz.
        dimensions: Package dimensions, accepts "LxWxH cm" strings.
        shipping_type: Pricing mode (flat/calculated/free/manual).
        flat_rate: Price charged for flat shipping.
        lead_time: Production days before the item ships.
        restricted_countries: Destinations the product never ships to.
        free_shipping_threshold: Order value from which shipping is free.
        custom_shipping_rates: Per-destination unit price overriding the table.
        currency: Currency of all monetary fields.
    """

    weight: Decimal | None = Field(default=None, gt=0)
    weight_unit: str = "kg"
    dimensions: Dimensions | None = None
    shipping_type: ShippingType = ShippingType.CALCULATED
    flat_rate: Decimal | None = Field(default=None, ge=0)
    lead_time: int = Field(default=0, ge=0)
    restricted_countries: list[str] = Field(default_factory=list)
    free_shipping_threshold: Decimal | None = Field(default=None, ge=0)
    custom_shipping_rates: dict[str, Decimal] = Field(default_factory=dict)
    currency: str = "USD"

    @field_validator("weight_unit")
    @classmethod
    def _check_weight_unit(cls, value: str) -> str:
        unit = value.lower()
        if unit not in _KG_PER_UNIT:
            raise ValueError(f"Unsupported weight unit: {value}")
        return unit

    @field_validator("dimensions", mode="before")
    @classmethod
    def _parse_dimensions(cls, value: object) -> object:
        if isinstance(value, str):
            return Dimensions.parse(value) if value.strip() else None
        return value

    @field_validator("flat_rate")
    @classmethod
    def _check_flat_rate_cents(cls, value: Decimal | None) -> Decimal | None:
        if value is not None and value != value.quantize(CENT):
            raise ValueError("flat_rate must have at most 2 decimal places")
        return value

    @field_validator("restricted_countries")
    @classmethod
    def _upper_countries(cls, value: list[str]) -> list[str]:
        return [code.strip().upper() for code in value]

    @field_validator("custom_shipping_rates")
    @classmethod
    def _upper_rate_keys(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        return {code.strip().upper(): rate for code, rate in value.items()}

    @model_validator(mode="after")
    def _flat_requires_rate(self) -> "ProductShippingDetails":
        if self.shipping_type == ShippingType.FLAT and self.flat_rate is None:
            raise ValueError("flat shipping requires flat_rate")
        return self

    @property
    def weight_kg(self) -> Decimal | None:
        """Unit weight converted to kilograms."""
        if self.weight is None:
            return None
        return self.weight * _KG_PER_UNIT[self.weight_unit]


class CostEstimate(BaseModel):
    """Shipping price held in integer minor units (cents).

    Attributes:
        amount_minor: Price in cents, never negative.
        currency: ISO currency code.
    """

    amount_minor: int = Field(ge=0)
    currency: str = "USD"

    @classmethod
    def from_amount(cls, amount: Decimal, currency: str = "USD") -> "CostEstimate":
        """Build an estimate from a decimal amount, rounding half up to cents."""
        cents = (Decimal(amount).quantize(CENT, ROUND_HALF_UP) * 100).to_integral_value()
        return cls(amount_minor=int(cents), currency=currency)

    @property
    def amount(self) -> Decimal:
        """Amount in currency units with two decimal places."""
        return (Decimal(self.amount_minor) / 100).quantize(CENT)


class DeliveryEstimate(BaseModel):
    """Transit time range in days.

    Attributes:
        min_days: Earliest delivery, in days.
        max_days: Latest delivery, in days.
    """

    min_days: int = Field(ge=0)
    max_days: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "DeliveryEstimate":
        if self.min_days > self.max_days:
            raise ValueError("min_days must not exceed max_days")
        return self

    def window(self, start: date) -> tuple[date, date]:
        """Return the earliest and latest delivery dates counted from start."""
        return start + timedelta(days=self.min_days), start + timedelta(days=self.max_days)


class ShippingEstimate(BaseModel):
    """Shipping quote reported to the checkout.

    Distinguishes an unknown price (incomplete input, unsupported route,
    failed calculation, shipping arranged after purchase) from free shipping.

    Attributes:
        status: unknown, free or amount.
        cost: Price for free/amount estimates.
        delivery: Transit time when it could be determined.
        message: Explanation shown to the user for unknown estimates.
    """

    status: EstimateStatus
    cost: CostEstimate | None = None
    delivery: DeliveryEstimate | None = None
    message: str | None = None

    @classmethod
    def unknown(
        cls, message: str | None = None, delivery: DeliveryEstimate | None = None
    ) -> "ShippingEstimate":
        return cls(status=EstimateStatus.UNKNOWN, message=message, delivery=delivery)

    @classmethod
    def from_cost(
        cls, cost: CostEstimate, delivery: DeliveryEstimate | None = None
    ) -> "ShippingEstimate":
        status = EstimateStatus.FREE if cost.amount_minor == 0 else EstimateStatus.AMOUNT
        return cls(status=status, cost=cost, delivery=delivery)

    @property
    def is_known(self) -> bool:
        return self.status != EstimateStatus.UNKNOWN


class CheckoutSummary(BaseModel):
    """Order price breakdown shown before placing an order.

    Attributes:
        unit_price: Product price per unit.
        quantity: Number of units.
        subtotal: unit_price x quantity.
        shipping: Shipping quote folded into the total.
        total: subtotal + shipping, None while shipping is unknown.
        currency: ISO currency code.
    """

    unit_price: Decimal
    quantity: int = Field(ge=1)
    subtotal: Decimal
    shipping: ShippingEstimate
    total: Decimal | None = None
    currency: str = "USD"


class CarrierRate(BaseModel):
    """Carrier quote for a package.

    Attributes:
        carrier: Carrier name.
        service: Carrier service level.
        rate: Price in currency units.
        estimated_days: Typical transit time.
        tracking_available: Whether the service is tracked.
    """

    carrier: str
    service: str
    rate: Decimal
    estimated_days: int
    tracking_available: bool = True


class PackageDetails(BaseModel):
    """Physical package handed to a carrier (cm / kg)."""

    length: Decimal = Field(gt=0)
    width: Decimal = Field(gt=0)
    height: Decimal = Field(gt=0)
    weight: Decimal = Field(gt=0)


class ShippingAddress(BaseModel):
    """Postal address of a shipment party."""

    name: str
    street1: str
    street2: str | None = None
    city: str
    state: str | None = None
    postal_code: str
    country: str
    phone: str | None = None
    email: str | None = None


class ShippingLabel(BaseModel):
    """Label created with a carrier."""

    tracking_number: str
    label_url: str
    carrier: str
    service: str


class TrackingEvent(BaseModel):
    """Single scan event of a tracked shipment."""

    timestamp: datetime
    location: str
    description: str


class TrackingInfo(BaseModel):
    """Shipment tracking status."""

    status: str
    estimated_delivery: date
    current_location: str | None = None
    events: list[TrackingEvent] = Field(default_factory=list)


class StorefrontAppearance(BaseModel):
    """Storefront theme customization.

    Attributes:
        primary_color: Hex colour for headings and buttons.
        secondary_color: Hex colour for borders and highlights.
        accent_color: Hex colour for badges.
        font_family: Font family name.
        header_layout: Header layout identifier.
        product_card_style: Product card layout identifier.
        custom_css: Optional raw CSS appended to the theme.
    """

    primary_color: str = "#4f46e5"
    secondary_color: str = "#f43f5e"
    accent_color: str = "#10b981"
    font_family: str = "Inter"
    header_layout: str = "standard"
    product_card_style: str = "standard"
    custom_css: str | None = None

    @field_validator("primary_color", "secondary_color", "accent_color")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        if not _HEX_COLOR_RE.match(value):
            raise ValueError("Please enter a valid hex color code.")
        return value


class Storefront(BaseModel):
    """Seller's public shop page.

    Attributes:
        slug: URL identifier, lowercase letters, digits and hyphens.
        name: Display name.
        description: Shop description.
        country: ISO country the seller ships from.
        location: Free-form location text.
        customization: Theme overrides, None for the default theme.
    """

    slug: str = Field(min_length=3)
    name: str = Field(min_length=3)
    description: str = ""
    country: str = "US"
    location: str | None = None
    customization: StorefrontAppearance | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str) -> str:
        if not _SLUG_RE.match(value):
            raise ValueError("Slug can only contain lowercase letters, numbers, and hyphens.")
        return value

    @field_validator("country")
    @classmethod
    def _upper_country(cls, value: str) -> str:
        return value.strip().upper()


class Product(BaseModel):
    """Catalog product with its shipping metadata.

    Attributes:
        id: Product identifier.
        name: Display name.
        storefront: Slug of the owning storefront.
        price: Unit price.
        seller_country: Country the product ships from.
        shipping: Shipping metadata.
    """

    id: str
    name: str
    storefront: str
    price: Decimal = Field(gt=0)
    seller_country: str = "US"
    shipping: ProductShippingDetails = Field(default_factory=ProductShippingDetails)
