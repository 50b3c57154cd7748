"""CraftsMatch marketplace toolkit.

Shipping estimation, checkout totals and storefront theming for a
marketplace connecting craftsmen with builders, served through a Telegram
bot front end.

The application follows a modular architecture with separate concerns for:
- Bot handlers and the interactive shipping calculator
- Shipping zones, rates and delivery estimation
- Carrier quotes and shipment tracking
- Storefront themes and the product catalog
"""
