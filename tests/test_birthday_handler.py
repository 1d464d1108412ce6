"""`/birthday` Telegram handler: arguments become Invocations, Replies become messages."""

from unittest import mock

import pytest

import config
from handlers.birthday_handler import USAGE_TEXT, build_birthday_handler, parse_invocation
from models.birthday import SubCommand
from security.auth import PERMISSION_DENIED_TEXT, UNAUTHORIZED_TEXT
from services import birthday_service


@pytest.fixture
def command(service):
    return build_birthday_handler(service).callback


def sent_text(update) -> str:
    update.message.reply_text.assert_awaited_once()
    return update.message.reply_text.await_args.args[0]


def test_command_is_registered_as_birthday(service):
    assert build_birthday_handler(service).commands == frozenset({"birthday"})


def test_parse_invocation_uses_user_identity(make_update):
    update = make_update(user_id=7, full_name="Bob Stone")
    invocation = parse_invocation(update, ["Add", "05.07"])

    assert invocation.owner_id == "7"
    assert invocation.display_name == "Bob Stone"
    assert invocation.sub_command is SubCommand.ADD
    assert invocation.argument == "05.07"


def test_parse_invocation_joins_remaining_args(make_update):
    invocation = parse_invocation(make_update(), ["edit", "05.07", "please"])
    assert invocation.argument == "05.07 please"


@pytest.mark.parametrize("args", [[], ["list"], ["birthday"]])
def test_parse_invocation_rejects_missing_or_unknown(make_update, args):
    assert parse_invocation(make_update(), args) is None


@pytest.mark.asyncio
async def test_add_then_get(command, repo, make_update, make_context):
    update = make_update()
    await command(update, make_context("add", "05.07"))
    assert "July 05" in sent_text(update)
    assert repo.records["42"].display_name == "Ann Lee"

    update = make_update()
    await command(update, make_context("get"))
    assert "July 05" in sent_text(update)


@pytest.mark.asyncio
async def test_invalid_date_replies_with_hint(command, repo, make_update, make_context):
    update = make_update()
    await command(update, make_context("add", "29.02"))

    assert sent_text(update) == birthday_service.FORMAT_HINT
    assert repo.records == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("args", [(), ("dance",)])
async def test_unknown_sub_command_shows_usage(command, make_update, make_context, args):
    update = make_update()
    await command(update, make_context(*args))
    assert sent_text(update) == USAGE_TEXT


@pytest.mark.asyncio
async def test_admin_menu_denied_for_regular_member(command, make_update, make_context):
    update = make_update()
    await command(update, make_context("admin", member_status="member"))
    assert sent_text(update) == PERMISSION_DENIED_TEXT


@pytest.mark.asyncio
async def test_admin_menu_for_chat_administrator(command, make_update, make_context):
    update = make_update()
    await command(update, make_context("admin", member_status="administrator"))
    assert sent_text(update) == birthday_service.ADMIN_MENU


@pytest.mark.asyncio
async def test_admin_check_happens_before_service(make_update, make_context):
    service = mock.Mock()
    command = build_birthday_handler(service).callback

    await command(make_update(), make_context("mod_menu"))

    service.handle.assert_not_called()


@pytest.mark.asyncio
async def test_whitelist_blocks_strangers(command, repo, make_update, make_context, monkeypatch):
    monkeypatch.setattr(config, "ALLOWED_USER_IDS", [1, 2, 3])
    update = make_update(user_id=42)

    await command(update, make_context("add", "05.07"))

    assert sent_text(update) == UNAUTHORIZED_TEXT
    assert repo.records == {}
