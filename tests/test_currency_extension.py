"""Tests for the currency cog."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from becca.modules.currency import coin
from becca.templates.records import Currency
from becca.utils.config import Emojis
from extensions.economy.currency import Currency as CurrencyCog
from extensions.economy.currency import setup

USER = 465650873650118659


@pytest.fixture
def cog(client):
    return CurrencyCog(client)


@pytest.fixture
def ctx():
    ctx = MagicMock()
    ctx.author.id = USER
    ctx.reply = AsyncMock()
    return ctx


async def test_handler_receives_callers_record(cog, client, store, ctx):
    handler = AsyncMock()

    with patch.dict("becca.modules.currency.CURRENCY_HANDLERS", {"daily": handler}):
        await cog.run_handler(ctx, "daily")

    handler.assert_awaited_once_with(client, ctx, Currency(user_id=USER))
    assert ("get_or_create_currency", USER) in store.calls


def test_commands_are_grouped(cog):
    group = cog.get_commands()[0]

    assert group.name == "currency"
    assert {command.name for command in group.commands} == {"balance", "daily", "weekly"}


async def test_setup_adds_cog():
    bot = MagicMock()
    bot.add_cog = AsyncMock()

    await setup(bot)

    assert isinstance(bot.add_cog.await_args.args[0], CurrencyCog)


def test_cog_keeps_client(cog, client):
    assert cog.client is client
    assert not hasattr(cog, "emoji")


def test_coin_emoji_comes_from_data_file():
    assert Emojis().get("coin") == coin
