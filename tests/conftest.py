"""
Pytest configuration and fixtures for Becca tests.

Provides:
- An in-memory record store with the same interface as RecordStore
- A client double carrying the runtime context handlers use
- Guild/channel doubles for the vote channel
"""

import asyncio
from datetime import datetime
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from becca.core.settings import BotConfigs
from becca.templates.records import Currency, Voter

HOME_GUILD = 111111111111111111
VOTE_CHANNEL = 222222222222222222
LOG_CHANNEL = 333333333333333333


class InMemoryRecordStore:
    """RecordStore double keeping records in dicts.

    Every increment yields to the event loop between reading and writing,
    so only the lock keeps concurrent increments from losing updates, the
    same guarantee the SQL upsert gives.
    """

    def __init__(self) -> None:
        self.voters: Dict[int, Voter] = {}
        self.currency: Dict[int, Currency] = {}
        self.calls: list = []
        self._lock = asyncio.Lock()

    async def get_voter(self, user_id: int) -> Optional[Voter]:
        self.calls.append(("get_voter", user_id))
        return self.voters.get(user_id)

    async def get_or_create_voter(self, user_id: int) -> Voter:
        self.calls.append(("get_or_create_voter", user_id))
        return self.voters.setdefault(user_id, Voter(user_id=user_id))

    async def increment_votes(self, user_id: int, kind: str) -> Voter:
        self.calls.append(("increment_votes", user_id, kind))

        column = {"bot": "bot_votes", "server": "server_votes"}.get(kind)
        if column is None:
            raise ValueError(f"There is no vote counter for {kind!r} votes.")

        async with self._lock:
            current = self.voters.get(user_id, Voter(user_id=user_id))
            await asyncio.sleep(0)
            updated = current.model_copy(update={column: getattr(current, column) + 1})
            self.voters[user_id] = updated

        return updated

    async def get_or_create_currency(self, user_id: int) -> Currency:
        self.calls.append(("get_or_create_currency", user_id))
        return self.currency.setdefault(user_id, Currency(user_id=user_id))

    async def update_currency(
        self,
        user_id: int,
        amount: int = 0,
        *,
        daily_claimed: Optional[datetime] = None,
        weekly_claimed: Optional[datetime] = None,
    ) -> Currency:
        self.calls.append(("update_currency", user_id, amount))

        current = self.currency.get(user_id, Currency(user_id=user_id))
        update = {"currency_total": current.currency_total + amount}
        if daily_claimed is not None:
            update["daily_claimed"] = daily_claimed
        if weekly_claimed is not None:
            update["weekly_claimed"] = weekly_claimed

        self.currency[user_id] = current.model_copy(update=update)
        return self.currency[user_id]


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def vote_channel():
    """A text channel whose sends are recorded."""
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = VOTE_CHANNEL
    channel.send = AsyncMock()
    return channel


@pytest.fixture
def home_guild(vote_channel):
    guild = MagicMock()
    guild.id = HOME_GUILD
    guild.fetch_channel = AsyncMock(return_value=vote_channel)
    return guild


@pytest.fixture
def client(store, home_guild):
    """Client double exposing what handlers read from the runtime context."""
    bot = MagicMock()
    bot.configs = BotConfigs(
        home_guild=HOME_GUILD,
        vote_channel=VOTE_CHANNEL,
        log_channel=LOG_CHANNEL,
    )
    bot.db = store
    bot.fetch_guild = AsyncMock(return_value=home_guild)
    bot.debug_hook = MagicMock()
    bot.debug_hook.send = AsyncMock()
    bot.exceptions = MagicMock()
    bot.exceptions.add_error = AsyncMock()
    bot.start_time = None
    bot.version = "1.0.0"
    bot.settings.PREFIX = ["becca!"]
    bot.settings.NODE_ENV = "development"
    bot.change_presence = AsyncMock()
    bot.process_commands = AsyncMock()
    bot.get_log_channel = AsyncMock(return_value=None)
    bot.guilds = [MagicMock(), MagicMock()]
    return bot
