"""Telegram bot message templates and constants.

Contains all user-facing message templates, error messages, and formatting
constants for bot responses. Centralizes message management for consistent
wording across the bot's commands.
"""

# Bot commands and descriptions
START_MESSAGE = (
    "Welcome to CraftsMatch! Estimate shipping for handcrafted goods.\n\n"
    "/products - browse the catalog\n"
    "/product <id> - pick a product\n"
    "/country <code> - set your country (e.g. US, DE)\n"
    "/method <name> - standard, express or overnight\n"
    "/quantity <n> - change the quantity\n"
    "/estimate - show the current estimate\n"
    "/carriers - compare carrier rates\n"
    "/track <number> [carrier] - track a shipment\n"
    "/store <slug> - view a storefront"
)

# Usage hints
USAGE_PRODUCT = "Usage: /product <id>. See /products for the catalog."
USAGE_COUNTRY = "Usage: /country <code>, for example /country DE"
USAGE_METHOD = "Usage: /method <standard|express|overnight>"
USAGE_QUANTITY = "Usage: /quantity <n>, n must be a whole number of at least 1"
USAGE_TRACK = "Usage: /track <tracking number> [carrier]"
USAGE_STORE = "Usage: /store <slug>"

# Error messages
ERROR_PRODUCT_NOT_FOUND = "Product '{product_id}' was not found."
ERROR_STORE_NOT_FOUND = "Storefront '{slug}' was not found."
ERROR_NO_PRODUCT_SELECTED = "Pick a product first with /product <id>."
ERROR_GENERIC = "❌ Something went wrong. Please try again later."
ERROR_SHIPPING_CALCULATION = (
    "Unable to calculate shipping. Please check your shipping information."
)

# Calculator states
SHIPPING_SELECT_COUNTRY = "Select your country to see shipping options."
SHIPPING_SELECT_METHOD = "Select a shipping method."
SHIPPING_UNAVAILABLE = "Shipping to this country is not available for this product."

# Catalog
CATALOG_HEADER = "🛍 Catalog"
CATALOG_LINE = "• {product_id}: {name} (${price})"
CATALOG_EMPTY = "The catalog is empty."

# Estimate formatting
PRODUCT_HEADER = "📦 {name}"
PRICE_LINE = "Price: ${price} x {quantity}"
DESTINATION_LINE = "Ship to: {country}"
METHODS_LINE = "Methods: {methods}"
METHOD_LINE = "Selected method: {method}"
SHIPPING_COST_LINE = "Shipping cost: ${amount}"
SHIPPING_FREE_LINE = "Shipping cost: Free"
SHIPPING_UNKNOWN_LINE = "Shipping cost: to be confirmed"
DELIVERY_RANGE_LINE = "Estimated delivery: {min_days}-{max_days} days"
DELIVERY_SINGLE_LINE = "Estimated delivery: {days} days"
SEPARATOR_LINE = "──────────────────"
SUBTOTAL_LINE = "Subtotal: ${subtotal}"
TOTAL_LINE = "Total: ${total}"
TOTAL_PENDING_LINE = "Total: ${subtotal} + shipping (to be confirmed)"
ERROR_LINE = "⚠️ {error}"
ESTIMATE_DISCLAIMER = (
    "Final shipping costs will be calculated at checkout based on actual weight and dimensions."
)

# Carriers
CARRIERS_HEADER = "🚚 Carrier rates to {country}"
CARRIER_RATE_LINE = "• {carrier} ({service}): ${rate}, ~{days} days"

# Tracking
TRACKING_HEADER = "📍 {tracking_number}: {status}"
TRACKING_ETA_LINE = "Estimated delivery: {date}"
TRACKING_EVENT_LINE = "• {timestamp} {location}: {description}"

# Storefront
STORE_HEADER = "🏪 {name}"
STORE_LOCATION_LINE = "Location: {location}"
STORE_THEME_LINE = "Theme: {primary} / {secondary} / {accent}, font {font}"
STORE_PRODUCTS_LINE = "Products: {products}"
