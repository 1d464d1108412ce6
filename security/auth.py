"""
security/auth.py
-----------------
Access checks for the Telegram bot.

- `authorized_only` blocks any user not in the ALLOWED_USER_IDS whitelist.
- `is_admin` decides who may open the birthday admin menu.
"""

from functools import wraps
from typing import Callable

from telegram import Update
from telegram.constants import ChatMemberStatus, ChatType
from telegram.error import TelegramError
from telegram.ext import ContextTypes

import config
from utils.logger import get_logger

logger = get_logger(__name__)

UNAUTHORIZED_TEXT = "⛔ Sorry, this bot is private."
PERMISSION_DENIED_TEXT = "⛔ Only chat administrators can open the birthday admin menu."

_ADMIN_STATUSES = (ChatMemberStatus.ADMINISTRATOR, ChatMemberStatus.OWNER)


def authorized_only(func: Callable):
    """
    Decorator that restricts a handler to whitelisted users only.

    Usage:
        @authorized_only
        async def my_handler(update, context):
            ...

    Behavior:
        - If ALLOWED_USER_IDS is empty, ALL users are allowed.
        - If the list is set, only those users can use the bot.
        - Unauthorized attempts are logged.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if config.ALLOWED_USER_IDS and user.id not in config.ALLOWED_USER_IDS:
            logger.warning(
                f"Unauthorized access attempt: user_id={user.id}, "
                f"username={user.username}, name={user.full_name}"
            )
            await update.message.reply_text(UNAUTHORIZED_TEXT)
            return

        return await func(update, context, *args, **kwargs)

    return wrapper


async def is_admin(update: Update, context: ContextTypes.DEFAULT_TYPE) -> bool:
    """
    Check whether the caller may administer birthdays.

    Users listed in ADMIN_USER_IDS always may. In group chats, so may the
    chat's administrators and its owner. A failed membership lookup counts
    as "no".
    """
    user = update.effective_user
    chat = update.effective_chat
    if not user:
        return False
    if user.id in config.ADMIN_USER_IDS:
        return True
    if not chat or chat.type == ChatType.PRIVATE:
        return False

    try:
        member = await context.bot.get_chat_member(chat.id, user.id)
    except TelegramError as e:
        logger.warning(f"Could not look up chat member {user.id} in chat {chat.id}: {e}")
        return False
    return member.status in _ADMIN_STATUSES
