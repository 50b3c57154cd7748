"""Application entry point.

Initializes and runs the CraftsMatch Telegram bot. Handles both webhook mode
(for production deployment) and polling mode (for local development).
Configures logging and registers bot handlers for commands.
"""

import logging

from telegram.ext import Application, CommandHandler

from .bot.handlers import (
    list_products,
    select_product,
    set_country,
    set_method,
    set_quantity,
    show_carriers,
    show_estimate,
    show_storefront,
    start,
    track_shipment,
)
from .config import config
from .core.container import Container

# Logging
logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

COMMANDS = {
    "start": start,
    "help": start,
    "products": list_products,
    "product": select_product,
    "country": set_country,
    "method": set_method,
    "quantity": set_quantity,
    "estimate": show_estimate,
    "carriers": show_carriers,
    "track": track_shipment,
    "store": show_storefront,
}


def build_application(token: str) -> Application:
    """Create the bot application with all command handlers registered."""
    app = Application.builder().token(token).build()
    for command, handler in COMMANDS.items():
        app.add_handler(CommandHandler(command, handler))
    return app


def main() -> None:
    """Main application entry point.

    Loads the catalog through the container so configuration errors surface
    at startup, then starts the bot in webhook or polling mode.

    Raises:
        RuntimeError: If BOT_TOKEN environment variable is not set.
    """
    if not config.bot.bot_token:
        raise RuntimeError("Set BOT_TOKEN environment variable")

    container = Container(app_config=config)
    products = container.product_store().list_products()
    logger.info(f"Catalog ready with {len(products)} products")

    app = build_application(config.bot.bot_token)

    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info(f"Starting webhook at {webhook_url}")

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
        )
    else:
        logger.warning("No public domain found; falling back to long-polling")
        app.run_polling()


if __name__ == "__main__":
    main()
