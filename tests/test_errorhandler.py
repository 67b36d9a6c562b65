"""Tests for the error handler every event handler reports to."""

import logging
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from becca.handlers.errorhandler import BeccaExceptionManager, handle_error


def raised(error: Exception) -> Exception:
    try:
        raise error
    except Exception as err:
        return err


@pytest.fixture
def webhook():
    hook = MagicMock()
    hook.send = AsyncMock()
    return hook


@pytest.fixture
def bot():
    return SimpleNamespace(user=None)


@pytest.fixture
def manager(bot, webhook):
    return BeccaExceptionManager(bot, webhook, cooldown=timedelta(0))


class TestBeccaExceptionManager:
    """Tests for BeccaExceptionManager."""

    async def test_error_is_relayed_to_webhook(self, manager, webhook):
        await manager.add_error(error=raised(ValueError("boom")), label="send vote message")
        await manager.flush()

        webhook.send.assert_awaited_once()
        embed = webhook.send.await_args.kwargs["embed"]
        assert embed.title == "An error occurred while trying to send vote message"
        assert "ValueError" in embed.fields[0].value
        assert "boom" in embed.description

    async def test_error_is_logged(self, manager, caplog):
        with caplog.at_level(logging.ERROR, logger="becca.errors"):
            await manager.add_error(error=raised(KeyError("missing")), label="guild create event")
            await manager.flush()

        assert "Error while trying to guild create event" in caplog.text

    async def test_same_traceback_is_grouped(self, manager):
        error = raised(ValueError("boom"))

        await manager.add_error(error=error, label="first")
        await manager.add_error(error=error, label="second")
        await manager.flush()

        assert len(manager.errors) == 1
        assert list(manager.errors.values()) == [2]

    async def test_only_counts_are_kept(self, manager):
        """Reported exceptions should not be held once released."""
        for label in ("first", "second", "third"):
            await manager.add_error(error=raised(KeyError(label)), label=label)
        await manager.flush()

        assert sum(manager.errors.values()) == 3
        assert all(isinstance(count, int) for count in manager.errors.values())
        assert manager._pending == set()

    async def test_long_traceback_is_split(self, manager, webhook):
        await manager.add_error(error=raised(ValueError("x" * 5000)), label="send vote message")
        await manager.flush()

        assert webhook.send.await_count == 2
        follow_up = webhook.send.await_args_list[1].kwargs["embeds"]
        assert all(embed.description.startswith("```py\n") for embed in follow_up)

    async def test_without_webhook_only_logs(self, bot, caplog):
        manager = BeccaExceptionManager(bot, None)

        with caplog.at_level(logging.ERROR, logger="becca.errors"):
            await manager.add_error(error=raised(ValueError("boom")), label="ready event")
            await manager.flush()

        assert "ready event" in caplog.text
        assert manager._pending == set()

    async def test_webhook_failure_is_swallowed(self, manager, webhook, caplog):
        webhook.send.side_effect = discord.DiscordException("webhook down")

        with caplog.at_level(logging.ERROR, logger="becca.errors"):
            await manager.add_error(error=raised(ValueError("boom")), label="send vote message")
            await manager.flush()

        assert "Failed to relay error" in caplog.text

    async def test_releases_wait_for_cooldown(self, bot, webhook, monkeypatch):
        manager = BeccaExceptionManager(bot, webhook, cooldown=timedelta(seconds=5))
        waits = []

        async def fake_sleep(seconds):
            waits.append(seconds)

        monkeypatch.setattr("becca.handlers.errorhandler.sleep", fake_sleep)

        await manager.add_error(error=raised(ValueError("one")), label="first")
        await manager.add_error(error=raised(ValueError("two")), label="second")
        await manager.flush()

        assert webhook.send.await_count == 2
        assert len(waits) == 1
        assert 0 < waits[0] <= 5


class TestHandleError:
    """Tests for handle_error."""

    async def test_forwards_to_manager(self):
        bot = MagicMock()
        bot.exceptions.add_error = AsyncMock()
        error = ValueError("boom")

        await handle_error(bot, "send vote message", error)

        bot.exceptions.add_error.assert_awaited_once_with(error=error, label="send vote message")

    async def test_without_manager_only_logs(self, caplog):
        with caplog.at_level(logging.ERROR, logger="becca.errors"):
            await handle_error(SimpleNamespace(), "ready event", ValueError("boom"))

        assert "ready event" in caplog.text

    async def test_never_raises(self, caplog):
        bot = MagicMock()
        bot.exceptions.add_error = AsyncMock(side_effect=RuntimeError("broken"))

        with caplog.at_level(logging.ERROR, logger="becca.errors"):
            await handle_error(bot, "send vote message", ValueError("boom"))

        assert "Failed to handle error" in caplog.text
