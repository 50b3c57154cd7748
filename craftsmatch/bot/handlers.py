"""Telegram bot handlers.

Thin command handlers that keep one shipping calculator session per chat
in ``context.user_data`` and delegate calculation to the services and
rendering to the response formatter. The session's estimate callback keeps
the chat's latest checkout summary next to it.
"""

import logging
from decimal import Decimal

from telegram import Update
from telegram.ext import ContextTypes

from ..models import PackageDetails, Product, ShippingEstimate
from ..services.carriers import get_carrier_service
from ..services.catalog import get_product_store
from ..services.checkout import build_checkout_summary
from ..services.shipping import ShippingMethodUnavailableError, get_shipping_service
from .calculator import EstimateCallback, ShippingCalculatorSession
from .messages import (
    ERROR_GENERIC,
    ERROR_NO_PRODUCT_SELECTED,
    ERROR_PRODUCT_NOT_FOUND,
    ERROR_STORE_NOT_FOUND,
    START_MESSAGE,
    USAGE_COUNTRY,
    USAGE_METHOD,
    USAGE_PRODUCT,
    USAGE_QUANTITY,
    USAGE_STORE,
    USAGE_TRACK,
)
from .response_formatter import response_formatter

logger = logging.getLogger(__name__)

SESSION_KEY = "calculator"
CHECKOUT_KEY = "checkout"

# Package size assumed for carrier quotes when the product has no dimensions
DEFAULT_PACKAGE_CM = (Decimal("30"), Decimal("20"), Decimal("10"))


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command with usage instructions."""
    if update.message:
        await update.message.reply_text(START_MESSAGE, disable_web_page_preview=True)


async def list_products(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /products command."""
    if not update.message:
        return

    products = get_product_store().list_products()
    await update.message.reply_text(response_formatter.format_catalog(products))


async def select_product(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /product <id>: start a calculator session for the product.

    Args:
        update: Telegram update object containing message data.
        context: Bot context holding per-chat user data.
    """
    if not update.message:
        return

    if not context.args:
        await update.message.reply_text(USAGE_PRODUCT)
        return

    product_id = context.args[0]
    product = get_product_store().get_product(product_id)
    if product is None:
        await update.message.reply_text(ERROR_PRODUCT_NOT_FOUND.format(product_id=product_id))
        return

    session = ShippingCalculatorSession(product, get_shipping_service())
    session.on_estimate_update = _checkout_updater(context.user_data, session)
    context.user_data[SESSION_KEY] = session
    context.user_data.pop(CHECKOUT_KEY, None)
    logger.info(f"Calculator session started for {product_id}")

    await _reply_calculator(update, context, session)


async def set_country(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /country <code>."""
    session = await _require_session(update, context)
    if session is None:
        return

    if not context.args:
        await update.message.reply_text(USAGE_COUNTRY)
        return

    try:
        session.set_country(context.args[0])
    except Exception as e:
        logger.error(f"Error updating country: {e}")
        await update.message.reply_text(ERROR_GENERIC)
        return

    await _reply_calculator(update, context, session)


async def set_method(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /method <name>."""
    session = await _require_session(update, context)
    if session is None:
        return

    if not context.args:
        await update.message.reply_text(USAGE_METHOD)
        return

    try:
        session.set_method(context.args[0])
    except ShippingMethodUnavailableError as e:
        await update.message.reply_text(str(e))
        return
    except Exception as e:
        logger.error(f"Error updating shipping method: {e}")
        await update.message.reply_text(ERROR_GENERIC)
        return

    await _reply_calculator(update, context, session)


async def set_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /quantity <n>."""
    session = await _require_session(update, context)
    if session is None:
        return

    try:
        quantity = int(context.args[0]) if context.args else 0
    except ValueError:
        quantity = 0

    if quantity < 1:
        await update.message.reply_text(USAGE_QUANTITY)
        return

    try:
        session.set_quantity(quantity)
    except Exception as e:
        logger.error(f"Error updating quantity: {e}")
        await update.message.reply_text(ERROR_GENERIC)
        return

    await _reply_calculator(update, context, session)


async def show_estimate(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /estimate."""
    session = await _require_session(update, context)
    if session is None:
        return

    await _reply_calculator(update, context, session)


async def show_carriers(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /carriers: compare carrier quotes for the session route."""
    session = await _require_session(update, context)
    if session is None:
        return

    if not session.country:
        await update.message.reply_text(USAGE_COUNTRY)
        return

    try:
        rates = await get_carrier_service().get_carrier_rates(
            session.product.seller_country, session.country, _package_for(session.product)
        )
    except Exception as e:
        logger.error(f"Error getting carrier rates: {e}")
        await update.message.reply_text(ERROR_GENERIC)
        return

    await update.message.reply_text(response_formatter.format_carrier_rates(session.country, rates))


async def track_shipment(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /track <number> [carrier]."""
    if not update.message:
        return

    if not context.args:
        await update.message.reply_text(USAGE_TRACK)
        return

    tracking_number = context.args[0]
    carrier = " ".join(context.args[1:]) or "Standard Post"

    try:
        info = await get_carrier_service().get_tracking_info(tracking_number, carrier)
    except Exception as e:
        logger.error(f"Error tracking {tracking_number}: {e}")
        await update.message.reply_text(ERROR_GENERIC)
        return

    await update.message.reply_text(response_formatter.format_tracking(tracking_number, info))


async def show_storefront(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /store <slug>."""
    if not update.message:
        return

    if not context.args:
        await update.message.reply_text(USAGE_STORE)
        return

    slug = context.args[0].lower()
    store = get_product_store()
    storefront = store.get_storefront(slug)
    if storefront is None:
        await update.message.reply_text(ERROR_STORE_NOT_FOUND.format(slug=slug))
        return

    products = [product for product in store.list_products() if product.storefront == slug]
    await update.message.reply_text(response_formatter.format_storefront(storefront, products))


async def _require_session(
    update: Update, context: ContextTypes.DEFAULT_TYPE
) -> ShippingCalculatorSession | None:
    """Return the chat's calculator session, prompting for a product if missing."""
    if not update.message:
        return None

    session = context.user_data.get(SESSION_KEY) if context.user_data is not None else None
    if session is None:
        await update.message.reply_text(ERROR_NO_PRODUCT_SELECTED)
        return None
    return session


def _checkout_updater(user_data: dict, session: ShippingCalculatorSession) -> EstimateCallback:
    """Keep the chat's checkout summary in step with every recomputed estimate."""

    def _update(estimate: ShippingEstimate) -> None:
        user_data[CHECKOUT_KEY] = build_checkout_summary(
            session.product.price,
            session.quantity,
            estimate,
            session.product.shipping.currency,
        )

    return _update


async def _reply_calculator(
    update: Update, context: ContextTypes.DEFAULT_TYPE, session: ShippingCalculatorSession
) -> None:
    summary = context.user_data.get(CHECKOUT_KEY)
    await update.message.reply_text(
        response_formatter.format_calculator(session.snapshot(), summary)
    )


def _package_for(product: Product) -> PackageDetails:
    shipping = product.shipping
    if shipping.dimensions is not None:
        length, width, height = shipping.dimensions.to_cm()
    else:
        length, width, height = DEFAULT_PACKAGE_CM

    weight = shipping.weight_kg
    if weight is None:
        weight = Decimal(str(get_shipping_service().config.shipping.default_weight_kg))

    return PackageDetails(length=length, width=width, height=height, weight=weight)
