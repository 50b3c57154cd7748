"""Shipping zone resolution.

Maps a destination/seller country pair onto a pricing tier using the region
groups from shipping_zones.yml. Country codes are normalised (case, common
three-letter aliases) before lookup.
"""

from ..config import Config
from ..models import ShippingZone


class ZoneResolver:
    def __init__(self, config: Config):
        self.config = config
        self._region_of: dict[str, str] = {}
        for region, countries in config.regions.items():
            for code in countries:
                # Unquoted YAML codes such as NO load as booleans
                if not isinstance(code, str):
                    raise ValueError(
                        f"Region '{region}' has non-string country code {code!r}; "
                        "quote it in shipping_zones.yml"
                    )
                self._region_of[code.strip().upper()] = region

    def normalize_country(self, country: str | None) -> str:
        """Return the canonical upper-case ISO code for a country code or alias."""
        code = (country or "").strip().upper()
        return self.config.country_aliases.get(code, code)

    def normalize_countries(self, countries: list[str]) -> set[str]:
        return {self.normalize_country(country) for country in countries}

    def is_supported(self, country: str | None) -> bool:
        return self.normalize_country(country) in self._region_of

    def get_shipping_zone(
        self, destination_country: str | None, seller_country: str | None
    ) -> ShippingZone | None:
        """Determine the shipping zone for a route.

        Args:
            destination_country: Buyer's country code.
            seller_country: Seller's country code.

        Returns:
            The zone, or None when either country is not shipped to.
        """
        destination = self.normalize_country(destination_country)
        seller = self.normalize_country(seller_country)

        destination_region = self._region_of.get(destination)
        seller_region = self._region_of.get(seller)
        if destination_region is None or seller_region is None:
            return None

        if destination == seller:
            return ShippingZone.DOMESTIC
        if destination_region == seller_region:
            return ShippingZone.REGIONAL
        return ShippingZone.INTERNATIONAL
