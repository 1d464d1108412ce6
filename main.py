"""
main.py
-------
Entry point for the BirthdayBot Telegram bot.

Responsibilities:
    - Open the database connection pool and create the schema.
    - Wire repository → service → handlers explicitly.
    - Configure and start the Telegram bot.
"""

from telegram import BotCommand, Update
from telegram.ext import Application, CommandHandler, ContextTypes

from config import (
    DATABASE_URL,
    DB_POOL_MAX,
    DB_POOL_MIN,
    DB_POOL_TIMEOUT_SECONDS,
    TELEGRAM_BOT_TOKEN,
)
from db.connection import Database
from db.init_db import create_tables
from handlers.birthday_handler import build_birthday_handler
from handlers.start_handler import help_command, ping_command, start_command
from repositories.birthday_repo import BirthdayRepository
from services.birthday_service import BirthdayService
from utils.logger import get_logger

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Start the bot"),
        BotCommand("help", "📖 Show help"),
        BotCommand("birthday", "🎂 Manage your birthday"),
        BotCommand("ping", "🏓 Check the bot is alive"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log anything a handler let escape; the next update is processed normally."""
    logger.error("Unhandled error while processing an update", exc_info=context.error)
    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text("❌ Something went wrong. Please try again.")


def build_application(service: BirthdayService) -> Application:
    """Build the Telegram application with every handler registered."""
    app = (
        Application.builder()
        .token(TELEGRAM_BOT_TOKEN)
        .concurrent_updates(True)
        .post_init(set_bot_commands)
        .build()
    )
    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("ping", ping_command))
    app.add_handler(build_birthday_handler(service))
    app.add_error_handler(on_error)
    return app


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    database = Database(
        DATABASE_URL,
        min_conn=DB_POOL_MIN,
        max_conn=DB_POOL_MAX,
        acquire_timeout=DB_POOL_TIMEOUT_SECONDS,
    )
    database.open()
    create_tables(database)

    # ── 2. Wire the birthday core ─────────────────────────
    service = BirthdayService(BirthdayRepository(database))

    # ── 3. Start polling ──────────────────────────────────
    logger.info("Starting Telegram bot...")
    app = build_application(service)
    try:
        logger.info("🚀 BirthdayBot is running! Press Ctrl+C to stop.")
        app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        database.close()
        logger.info("BirthdayBot stopped.")


if __name__ == "__main__":
    main()
