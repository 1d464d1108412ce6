"""
services/birthday_service.py
-----------------------------
Business logic for the /birthday sub-commands.
Orchestrates between the date parser and the BirthdayRepository.
"""

from typing import Callable, Dict

from models.birthday import Invocation, Reply, SubCommand
from models.errors import (
    BirthdayError,
    ConflictError,
    InvalidDateError,
    NotFoundError,
    StorageError,
)
from parsers.date_parser import parse_birthday
from repositories.birthday_repo import BirthdayRepository
from utils.logger import get_logger

logger = get_logger(__name__)

# ── Reply texts ──────────────────────────────────────────

FORMAT_HINT = (
    "⚠️ Provide a valid date in the format dd.mm, e.g. /birthday add 05.07.\n"
    "29.02 is not accepted, please pick 28.02 or 01.03 instead."
)
ALREADY_EXISTS = (
    "⚠️ Your birthday is already saved. Use /birthday edit dd.mm to change it."
)
NOT_FOUND_USE_ADD = (
    "⚠️ You don't have a birthday saved yet. Use /birthday add dd.mm first."
)
NO_BIRTHDAY = "📭 No birthday found for you. Use /birthday add dd.mm to save one."
TRY_AGAIN = "❌ Something went wrong while saving your data. Please try again later."
ADMIN_MENU = (
    "🛠️ Birthday admin menu\n\n"
    "• /birthday add dd.mm - save your birthday\n"
    "• /birthday edit dd.mm - change it\n"
    "• /birthday get - show it\n"
    "• /birthday remove - delete it\n"
)

Handler = Callable[[Invocation], Reply]


class BirthdayService:
    """
    Resolves one Invocation into one Reply.

    Workflow:
        1. Pick the handler for the sub-command from the dispatch table.
        2. Validate the argument with the date parser when a date is needed.
        3. Check the precondition and mutate or read via the repository.
        4. Map every outcome, including failures, to a Reply.

    The service keeps no state between calls and re-checks the store on
    every request, so it can be shared by concurrent handlers.
    """

    def __init__(
        self,
        repository: BirthdayRepository,
        parse_date: Callable[[str], tuple[int, int]] = parse_birthday,
    ):
        self.repository = repository
        self.parse_date = parse_date
        self._dispatch: Dict[SubCommand, Handler] = {
            SubCommand.ADD: self.add,
            SubCommand.EDIT: self.edit,
            SubCommand.REMOVE: self.remove,
            SubCommand.GET: self.get,
            SubCommand.ADMINISTER: self.administer,
        }
        missing = set(SubCommand) - set(self._dispatch)
        if missing:
            raise RuntimeError(f"No handler registered for {sorted(s.value for s in missing)}")

    def handle(self, invocation: Invocation) -> Reply:
        """
        Execute one sub-command.

        Returns:
            The Reply to send back. Failed replies carry the typed error.
        """
        if invocation.sub_command.needs_argument and not invocation.argument.strip():
            logger.info(
                f"{invocation.owner_id} sent '{invocation.sub_command.value}' without a date"
            )
            return Reply(FORMAT_HINT, ok=False, error=InvalidDateError("", "no date given"))

        try:
            return self._dispatch[invocation.sub_command](invocation)
        except BirthdayError as e:
            return self._reply_for_error(invocation, e)

    # ── Sub-commands ─────────────────────────────────────

    def add(self, invocation: Invocation) -> Reply:
        """Save a birthday for a member who has none yet."""
        day, month = self.parse_date(invocation.argument)
        if self.repository.exists(invocation.owner_id):
            raise ConflictError(invocation.owner_id)

        record = self.repository.insert(
            invocation.owner_id, day, month, invocation.display_name
        )
        return Reply(
            f"🎂 Added {record.display_name}'s birthday: {record.formatted()}.", ok=True
        )

    def edit(self, invocation: Invocation) -> Reply:
        """Change the date of an existing birthday."""
        day, month = self.parse_date(invocation.argument)
        if not self.repository.exists(invocation.owner_id):
            raise NotFoundError(invocation.owner_id)

        record = self.repository.update(
            invocation.owner_id, day, month, display_name=invocation.display_name
        )
        return Reply(
            f"✏️ Updated {record.display_name}'s birthday to {record.formatted()}.", ok=True
        )

    def remove(self, invocation: Invocation) -> Reply:
        """Delete the member's birthday."""
        if not self.repository.exists(invocation.owner_id):
            raise NotFoundError(invocation.owner_id)

        self.repository.remove(invocation.owner_id)
        return Reply(f"🗑️ Removed {invocation.display_name}'s birthday.", ok=True)

    def get(self, invocation: Invocation) -> Reply:
        """Show the member's birthday."""
        record = self.repository.get(invocation.owner_id)
        return Reply(f"🎂 {record.display_name}'s birthday is {record.formatted()}.", ok=True)

    def administer(self, invocation: Invocation) -> Reply:
        """Admin menu. The caller's permission is checked before this runs."""
        logger.info(f"{invocation.owner_id} opened the birthday admin menu")
        return Reply(ADMIN_MENU, ok=True)

    # ── Error mapping ────────────────────────────────────

    @staticmethod
    def _reply_for_error(invocation: Invocation, error: BirthdayError) -> Reply:
        """Translate a typed failure into the user-facing Reply."""
        sub_command = invocation.sub_command
        if isinstance(error, InvalidDateError):
            logger.info(f"Invalid date from {invocation.owner_id}: {error}")
            text = FORMAT_HINT
        elif isinstance(error, ConflictError):
            text = ALREADY_EXISTS
        elif isinstance(error, NotFoundError):
            text = NO_BIRTHDAY if sub_command is SubCommand.GET else NOT_FOUND_USE_ADD
        elif isinstance(error, StorageError):
            logger.error(
                f"Storage failure for {invocation.owner_id} on '{sub_command.value}': {error}"
            )
            text = TRY_AGAIN
        else:
            logger.error(f"Unhandled birthday error for {invocation.owner_id}: {error}")
            text = TRY_AGAIN
        return Reply(text, ok=False, error=error)
