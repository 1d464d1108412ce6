"""
models/birthday.py
------------------
Domain model for stored birthdays and for the requests/responses
exchanged between the chat layer and BirthdayService.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from models.errors import BirthdayError

# Non-leap reference year; 29.02 therefore never validates.
REFERENCE_YEAR = 1970


@dataclass
class BirthdayRecord:
    """
    A single member's birthday.

    Attributes:
        owner_id: Stable identity of the member (unique key).
        day: Day of month, valid for `month` in the reference year.
        month: Month number 1-12.
        display_name: Member's name when the record was last written.
    """
    owner_id: str
    day: int
    month: int
    display_name: str

    def as_date(self) -> date:
        """The birthday anchored in the reference year."""
        return date(REFERENCE_YEAR, self.month, self.day)

    def formatted(self) -> str:
        """Month name and zero-padded day, e.g. 'July 05'."""
        return "{0:%B} {0:%d}".format(self.as_date())


class SubCommand(Enum):
    """Every sub-command `/birthday` understands."""
    ADD = "add"
    EDIT = "edit"
    REMOVE = "remove"
    GET = "get"
    ADMINISTER = "administer"

    @property
    def needs_argument(self) -> bool:
        return self in (SubCommand.ADD, SubCommand.EDIT)

    @classmethod
    def from_name(cls, name: str) -> Optional["SubCommand"]:
        """Resolve a typed word (or one of its aliases) to a sub-command."""
        return _ALIASES.get(name.strip().lower())


_ALIASES = {
    **{sub.value: sub for sub in SubCommand},
    "set": SubCommand.ADD,
    "change": SubCommand.EDIT,
    "delete": SubCommand.REMOVE,
    "del": SubCommand.REMOVE,
    "rm": SubCommand.REMOVE,
    "show": SubCommand.GET,
    "admin": SubCommand.ADMINISTER,
    "mod": SubCommand.ADMINISTER,
    "mod_menu": SubCommand.ADMINISTER,
}


@dataclass(frozen=True)
class Invocation:
    """One parsed `/birthday` request."""
    owner_id: str
    display_name: str
    sub_command: SubCommand
    argument: str = ""


@dataclass(frozen=True)
class Reply:
    """
    What the chat layer sends back.

    Attributes:
        text: Message shown to the user.
        ok: Whether the request succeeded.
        error: The typed failure behind a failed reply, for logging only.
    """
    text: str
    ok: bool
    error: Optional[BirthdayError] = None
