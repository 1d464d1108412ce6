"""
handlers/birthday_handler.py
-----------------------------
Handles the `/birthday` command.

Usage:
    /birthday add 05.07    → save your birthday
    /birthday edit 20.12   → change it
    /birthday get          → show it
    /birthday remove       → delete it
    /birthday admin        → admin menu (chat administrators only)
"""

import asyncio

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from models.birthday import Invocation, SubCommand
from security.auth import PERMISSION_DENIED_TEXT, authorized_only, is_admin
from security.rate_limiter import rate_limited
from services.birthday_service import BirthdayService
from utils.logger import get_logger

logger = get_logger(__name__)

USAGE_TEXT = (
    "🎂 Birthday commands\n\n"
    "• /birthday add dd.mm - save your birthday\n"
    "• /birthday edit dd.mm - change it\n"
    "• /birthday get - show it\n"
    "• /birthday remove - delete it\n"
)


def parse_invocation(update: Update, args: list[str]) -> Invocation | None:
    """
    Build an Invocation from the command arguments.

    Returns:
        None when the sub-command is missing or unknown.
    """
    if not args:
        return None
    sub_command = SubCommand.from_name(args[0])
    if sub_command is None:
        return None

    user = update.effective_user
    return Invocation(
        owner_id=str(user.id),
        display_name=user.full_name,
        sub_command=sub_command,
        argument=" ".join(args[1:]),
    )


def build_birthday_handler(service: BirthdayService) -> CommandHandler:
    """Create the `/birthday` CommandHandler bound to a service instance."""

    @authorized_only
    @rate_limited
    async def birthday_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        invocation = parse_invocation(update, context.args or [])
        if invocation is None:
            await update.message.reply_text(USAGE_TEXT)
            return

        if invocation.sub_command is SubCommand.ADMINISTER and not await is_admin(update, context):
            logger.warning(f"User {invocation.owner_id} was denied the birthday admin menu")
            await update.message.reply_text(PERMISSION_DENIED_TEXT)
            return

        # Store calls block on the database; keep them off the event loop.
        reply = await asyncio.to_thread(service.handle, invocation)
        if reply.ok:
            logger.info(f"'{invocation.sub_command.value}' succeeded for user {invocation.owner_id}")
        else:
            logger.info(
                f"'{invocation.sub_command.value}' failed for user {invocation.owner_id}: "
                f"{type(reply.error).__name__}"
            )
        await update.message.reply_text(reply.text)

    return CommandHandler("birthday", birthday_command)
