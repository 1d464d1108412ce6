"""
security/rate_limiter.py
-------------------------
Rate limiting middleware to keep a single member from flooding the bot.
Limits the number of commands a user can send within a sliding time window.
"""

import time
from collections import deque
from functools import wraps
from typing import Callable, Deque, Dict

from telegram import Update
from telegram.ext import ContextTypes

from config import RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)

RATE_LIMITED_TEXT = "⏳ You're sending commands too quickly. Please wait a moment."


class RateLimiter:
    """Sliding-window counter of recent commands, per user."""

    def __init__(
        self,
        max_messages: int = RATE_LIMIT_MESSAGES,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_messages = max_messages
        self.window_seconds = window_seconds
        self.clock = clock
        self._hits: Dict[int, Deque[float]] = {}
        self._last_sweep = clock()

    def allow(self, user_id: int) -> bool:
        """Record a hit for the user and say whether it is within the limit."""
        now = self.clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        hits = self._hits.setdefault(user_id, deque())
        self._prune(hits, now)
        if len(hits) >= self.max_messages:
            return False
        hits.append(now)
        return True

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Forget users with no hits left in the window."""
        for user_id in list(self._hits):
            self._prune(self._hits[user_id], now)
            if not self._hits[user_id]:
                del self._hits[user_id]
        self._last_sweep = now


_default_limiter = RateLimiter()


def rate_limited(func: Callable = None, *, limiter: RateLimiter = None):
    """
    Decorator that rejects a handler call once the user exceeds the limit.

    Usage:
        @rate_limited
        async def my_handler(update, context): ...

        @rate_limited(limiter=RateLimiter(max_messages=3, window_seconds=10))
        async def other_handler(update, context): ...
    """
    if func is None:
        return lambda f: rate_limited(f, limiter=limiter)

    active = limiter or _default_limiter

    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if not active.allow(user.id):
            logger.warning(f"Rate limit hit for user {user.id}")
            await update.message.reply_text(RATE_LIMITED_TEXT)
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
