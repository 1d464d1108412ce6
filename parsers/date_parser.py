"""
parsers/date_parser.py
----------------------
Turns the `dd.mm` argument of `/birthday add|edit` into a (day, month) pair.

The token is completed with the reference year and validated by
`datetime.strptime`, so only real calendar dates get through. The
reference year is not a leap year: 29.02 is rejected like any other
impossible date.
"""

import re
from datetime import datetime

from models.birthday import REFERENCE_YEAR
from models.errors import InvalidDateError

_DAY_MONTH = re.compile(r"(\d{1,2})\.(\d{1,2})", re.ASCII)


def parse_birthday(raw: str) -> tuple[int, int]:
    """
    Parse a `dd.mm` token.

    Args:
        raw: User input, e.g. "05.07" or "5.7". Surrounding whitespace is ignored.

    Returns:
        (day, month) as ints.

    Raises:
        InvalidDateError: If the token is not two numeric fields separated by
            a dot, or the date does not exist in the reference year.
    """
    token = (raw or "").strip()
    if not _DAY_MONTH.fullmatch(token):
        raise InvalidDateError(raw, "expected dd.mm")

    try:
        moment = datetime.strptime(f"{token}.{REFERENCE_YEAR}", "%d.%m.%Y")
    except ValueError as e:
        raise InvalidDateError(raw, "no such day in the calendar") from e

    return moment.day, moment.month
