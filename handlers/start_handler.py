"""
handlers/start_handler.py
--------------------------
Handles /start, /help and /ping.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.birthday_handler import USAGE_TEXT
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)


@authorized_only
@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - greet the user and show the birthday commands."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.full_name}) started the bot.")
    await update.message.reply_text(f"Hi {user.full_name}! 👋\n\n{USAGE_TEXT}")


@authorized_only
@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(USAGE_TEXT)


@authorized_only
async def ping_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /ping command - liveness check."""
    await update.message.reply_text("Pong!")
