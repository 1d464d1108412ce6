"""
models/errors.py
----------------
Typed failures of the birthday core.

Hierarchy:
    BirthdayError
    ├── InvalidDateError   bad user input, always recoverable
    └── StoreError
        ├── ConflictError  a record already exists for the owner
        ├── NotFoundError  no record exists for the owner
        └── StorageError   database fault (connection, disk, pool)

Only the repository layer translates psycopg2 exceptions into these.
The service layer turns every one of them into a Reply.
"""

from typing import Optional


class BirthdayError(Exception):
    """Base class for every error raised by the birthday core."""

    def __init__(self, message: str, owner_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.owner_id = owner_id


class InvalidDateError(BirthdayError, ValueError):
    """The argument is not a real `dd.mm` date in the reference year."""

    def __init__(self, raw: str, reason: str = "not a valid dd.mm date"):
        super().__init__(f"{raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class StoreError(BirthdayError):
    """Base class for failures reported by the birthday store."""


class ConflictError(StoreError):
    """Raised on insert when the owner already has a record."""

    def __init__(self, owner_id: str):
        super().__init__(f"Birthday for {owner_id} already exists", owner_id)


class NotFoundError(StoreError):
    """Raised when the owner has no record to read, update or remove."""

    def __init__(self, owner_id: str):
        super().__init__(f"No birthday stored for {owner_id}", owner_id)


class StorageError(StoreError):
    """The database could not complete the operation."""

    def __init__(self, operation: str, owner_id: Optional[str] = None, detail: str = ""):
        message = f"Storage failure during {operation}"
        if detail:
            message += f": {detail}"
        super().__init__(message, owner_id)
        self.operation = operation
        self.detail = detail
