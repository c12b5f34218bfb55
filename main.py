"""Movie Trailer Telegram Bot - Main Entry Point."""

import asyncio

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, MessageHandler, filters

from commands import NAV_CALLBACK_PATTERN
from config import TELEGRAM_BOT_TOKEN, HEALTH_PORT, logger
from health import build_server
from handlers import SESSIONS_KEY, error_handler, handle_command, handle_navigation
from sessions import SessionStore


def build_application(token: str = TELEGRAM_BOT_TOKEN) -> Application:
    """Create the bot application with handlers and a fresh session store."""
    application = Application.builder().token(token).build()
    application.bot_data[SESSIONS_KEY] = SessionStore()

    # Register handlers
    application.add_handler(MessageHandler(filters.UpdateType.MESSAGE & filters.COMMAND, handle_command))
    application.add_handler(CallbackQueryHandler(handle_navigation, pattern=NAV_CALLBACK_PATTERN))
    application.add_error_handler(error_handler)
    return application


async def run_with_health_server(application: Application, port: int) -> None:
    """Poll for updates while uvicorn serves the health endpoint; uvicorn owns shutdown signals."""
    server = build_server(port=port)
    async with application:
        await application.start()
        await application.updater.start_polling(
            allowed_updates=Update.ALL_TYPES,
            drop_pending_updates=True
        )
        logger.info(f"Health endpoint listening on port {port}")
        try:
            await server.serve()
        finally:
            await application.updater.stop()
            await application.stop()


def main():
    """Start the bot."""
    application = build_application()

    logger.info("Bot is starting...")
    try:
        if HEALTH_PORT:
            asyncio.run(run_with_health_server(application, HEALTH_PORT))
        else:
            application.run_polling(
                allowed_updates=Update.ALL_TYPES,
                drop_pending_updates=True
            )
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Error running bot: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
