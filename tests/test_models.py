"""Domain models: sub-command resolution and birthday formatting."""

from datetime import date

import pytest

from models.birthday import (
    REFERENCE_YEAR,
    BirthdayRecord,
    Invocation,
    SubCommand,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("add", SubCommand.ADD),
        ("ADD", SubCommand.ADD),
        ("set", SubCommand.ADD),
        ("edit", SubCommand.EDIT),
        ("change", SubCommand.EDIT),
        ("remove", SubCommand.REMOVE),
        ("delete", SubCommand.REMOVE),
        ("rm", SubCommand.REMOVE),
        ("get", SubCommand.GET),
        ("show", SubCommand.GET),
        ("administer", SubCommand.ADMINISTER),
        ("mod_menu", SubCommand.ADMINISTER),
        (" admin ", SubCommand.ADMINISTER),
    ],
)
def test_from_name_resolves_names_and_aliases(name, expected):
    assert SubCommand.from_name(name) is expected


@pytest.mark.parametrize("name", ["", "list", "birthday", "adds"])
def test_from_name_returns_none_for_unknown(name):
    assert SubCommand.from_name(name) is None


def test_only_add_and_edit_need_an_argument():
    assert {s for s in SubCommand if s.needs_argument} == {SubCommand.ADD, SubCommand.EDIT}


def test_formatted_uses_month_name_and_padded_day():
    assert BirthdayRecord("1", 5, 7, "Ann").formatted() == "July 05"
    assert BirthdayRecord("1", 20, 12, "Ann").formatted() == "December 20"


def test_record_as_date_uses_reference_year():
    record = BirthdayRecord(owner_id="1", day=28, month=2, display_name="Ann")
    assert record.as_date() == date(REFERENCE_YEAR, 2, 28)
    assert record.formatted() == "February 28"


def test_invocation_argument_defaults_to_empty():
    invocation = Invocation(owner_id="1", display_name="Ann", sub_command=SubCommand.GET)
    assert invocation.argument == ""
