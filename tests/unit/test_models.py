"""Tests for model validation and conversions."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from craftsmatch.models import (
    CostEstimate,
    DeliveryEstimate,
    Dimensions,
    EstimateStatus,
    ProductShippingDetails,
    ShippingEstimate,
    ShippingType,
    Storefront,
    StorefrontAppearance,
)


class TestDimensions:
    def test_parse_with_unit(self):
        dims = Dimensions.parse("10 x 20 x 30 in")

        assert (dims.length, dims.width, dims.height) == (Decimal("10"), Decimal("20"), Decimal("30"))
        assert dims.unit == "in"

    def test_parse_defaults_to_cm(self):
        assert Dimensions.parse("45x30x4").unit == "cm"

    def test_inches_converted_to_cm(self):
        assert Dimensions.parse("1x2x3 in").to_cm() == (
            Decimal("2.54"),
            Decimal("5.08"),
            Decimal("7.62"),
        )

    @pytest.mark.parametrize("text", ["", "10x20", "axbxc cm", "10x20x30 mm"])
    def test_unparseable_text(self, text):
        with pytest.raises(ValueError):
            Dimensions.parse(text)

    def test_non_positive_side_rejected(self):
        with pytest.raises(ValidationError):
            Dimensions(length=0, width=1, height=1)


class TestProductShippingDetails:
    def test_defaults(self):
        details = ProductShippingDetails()

        assert details.shipping_type == ShippingType.CALCULATED
        assert details.weight_kg is None
        assert details.restricted_countries == []
        assert details.lead_time == 0

    def test_dimensions_string_is_parsed(self):
        details = ProductShippingDetails(dimensions="32x32x14 cm")
        assert details.dimensions == Dimensions(length=32, width=32, height=14)

    def test_blank_dimensions_are_none(self):
        assert ProductShippingDetails(dimensions="  ").dimensions is None

    def test_country_codes_are_normalised(self):
        details = ProductShippingDetails(
            restricted_countries=[" au", "nz"],
            custom_shipping_rates={"se": Decimal("12")},
        )

        assert details.restricted_countries == ["AU", "NZ"]
        assert details.custom_shipping_rates == {"SE": Decimal("12")}

    def test_flat_requires_rate(self):
        with pytest.raises(ValidationError, match="flat_rate"):
            ProductShippingDetails(shipping_type=ShippingType.FLAT)

    def test_unknown_weight_unit(self):
        with pytest.raises(ValidationError):
            ProductShippingDetails(weight=Decimal("1"), weight_unit="stone")

    def test_weight_kg_conversion(self):
        details = ProductShippingDetails(weight=Decimal("250"), weight_unit="G")
        assert details.weight_kg == Decimal("0.250")

    def test_negative_lead_time_rejected(self):
        with pytest.raises(ValidationError):
            ProductShippingDetails(lead_time=-1)


class TestEstimates:
    def test_cost_rounded_half_up_to_cents(self):
        cost = CostEstimate.from_amount(Decimal("13.175"), "EUR")

        assert cost.amount_minor == 1318
        assert cost.amount == Decimal("13.18")
        assert cost.currency == "EUR"

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            CostEstimate(amount_minor=-1)

    def test_delivery_range_must_be_ordered(self):
        with pytest.raises(ValidationError):
            DeliveryEstimate(min_days=5, max_days=3)

    def test_delivery_window(self):
        start = date(2025, 3, 1)
        assert DeliveryEstimate(min_days=3, max_days=7).window(start) == (
            date(2025, 3, 4),
            date(2025, 3, 8),
        )

    def test_zero_cost_is_free(self):
        estimate = ShippingEstimate.from_cost(CostEstimate(amount_minor=0))

        assert estimate.status == EstimateStatus.FREE
        assert estimate.is_known

    def test_unknown_has_no_cost(self):
        estimate = ShippingEstimate.unknown("Select your country")

        assert estimate.status == EstimateStatus.UNKNOWN
        assert estimate.cost is None
        assert not estimate.is_known


class TestStorefront:
    def test_appearance_defaults(self):
        theme = StorefrontAppearance()

        assert theme.primary_color == "#4f46e5"
        assert theme.secondary_color == "#f43f5e"
        assert theme.accent_color == "#10b981"
        assert theme.font_family == "Inter"

    @pytest.mark.parametrize("color", ["#fff", "#A1b2C3"])
    def test_valid_hex_colors(self, color):
        assert StorefrontAppearance(primary_color=color).primary_color == color

    @pytest.mark.parametrize("color", ["red", "#ggg", "#12345", "4f46e5"])
    def test_invalid_hex_colors(self, color):
        with pytest.raises(ValidationError, match="valid hex color"):
            StorefrontAppearance(accent_color=color)

    def test_slug_rules(self):
        with pytest.raises(ValidationError):
            Storefront(slug="Oak Iron", name="Oak & Iron")
        with pytest.raises(ValidationError):
            Storefront(slug="ok", name="Oak & Iron")

    def test_country_uppercased(self):
        assert Storefront(slug="oak-iron", name="Oak & Iron", country="dk").country == "DK"


@pytest.mark.parametrize("rate", [Decimal("8.555"), Decimal("0.001")])
def test_flat_rate_limited_to_cents(rate):
    with pytest.raises(ValidationError, match="2 decimal places"):
        ProductShippingDetails(shipping_type=ShippingType.FLAT, flat_rate=rate)


def test_flat_rate_in_cents_is_kept():
    details = ProductShippingDetails(shipping_type=ShippingType.FLAT, flat_rate=Decimal("8.5"))
    assert details.flat_rate == Decimal("8.50")
