from asyncio import Lock, Task, create_task, gather, sleep
from collections import Counter
from datetime import datetime, timedelta
from logging import getLogger
from os import getcwd
from traceback import format_exception
from typing import (TYPE_CHECKING, Any, Dict, Generator, List, Optional, Set,
                    Tuple)

from discord import Embed, Webhook, utils

from ..templates.exceptions import BeccaTraceback

if TYPE_CHECKING:
    from ..core import Becca

log = getLogger("becca.errors")


class BeccaExceptionManager:
    """A simple exception handler that logs every exception to the console
    and, when a debug webhook is configured, relays it there as well.

    Releases to the webhook run as background tasks guarded by a lock and a
    cooldown.

    Attributes
    ----------
    bot: :class:`Becca`
        The bot instance.
    cooldown: :class:`datetime.timedelta`
        The cooldown between sending errors. This defaults to 5 seconds.
    errors: Counter[str]
        How many times each traceback was reported. Exceptions themselves
        are not kept once released.
    code_blocker: :class:`str`
        The code blocker used to format Discord codeblocks.
    error_webhook: Optional[:class:`discord.Webhook`]
        The webhook errors are relayed to, if any.
    """

    __slots__: Tuple[str, ...] = (
        'bot', 'cooldown', '_lock', '_most_recent', '_pending',
        'errors', 'code_blocker', 'error_webhook'
    )

    def __init__(
            self,
            bot: "Becca",
            webhook: Optional[Webhook] = None,
            *,
            cooldown: timedelta = timedelta(seconds=5)
    ) -> None:

        self.bot: "Becca" = bot
        self.cooldown: timedelta = cooldown

        self._lock: Lock = Lock()
        self._most_recent: Optional[datetime] = None
        self._pending: Set[Task] = set()

        self.errors: Counter[str] = Counter()
        self.code_blocker: str = '```py\n{}```'
        self.error_webhook: Optional[Webhook] = webhook

    def _yield_code_chunks(self, iterable: str, *, chunksize: int = 2000) -> Generator[str, None, None]:
        cbs = len(self.code_blocker) - 2  # code blocker size

        for i in range(0, len(iterable), chunksize - cbs):
            yield self.code_blocker.format(iterable[i : i + chunksize - cbs])

    async def release_error(self, traceback: str, packet: BeccaTraceback) -> None:
        """|coro|

        Sends an error to the webhook. It is not recommended to call this
        yourself, call :meth:`add_error` instead.

        Parameters
        ----------
        traceback: :class:`str`
            The formatted traceback of the error.
        packet: :class:`dict`
            The additional information about the error.
        """

        webhook = self.error_webhook
        if webhook is None:
            return

        error = packet['exception']
        embed = Embed(
            title=f'An error occurred while trying to {packet["label"]}',
            timestamp=packet['time'],
            color=0xFF0307,
        )
        embed.add_field(
            name='Metadata',
            value=(
                f'**Time**: {utils.format_dt(packet["time"])}\n'
                f'**Type**: `{type(error).__name__}`\n'
                f'**Message**: {str(error)[:900] or "No message"}'
            ),
        )

        kwargs: Dict[str, Any] = {}
        if self.bot.user:
            kwargs['username'] = self.bot.user.display_name
            kwargs['avatar_url'] = self.bot.user.display_avatar.url

            embed.set_author(name=str(self.bot.user), icon_url=self.bot.user.display_avatar.url)

        code_chunks = list(self._yield_code_chunks(traceback))

        embed.description = code_chunks.pop(0)
        await webhook.send(embed=embed, **kwargs)

        embeds: List[Embed] = []
        for entry in code_chunks:
            embeds.append(Embed(description=entry))

            if len(embeds) == 10:
                await webhook.send(embeds=embeds, **kwargs)
                embeds = []

        if embeds:
            await webhook.send(embeds=embeds, **kwargs)

    async def add_error(self, *, error: BaseException, label: str) -> None:
        """|coro|

        Add an error to the error manager. The error is logged right away,
        the webhook release is scheduled in the background.

        Parameters
        ----------
        error: :class:`Exception`
            The error to add.
        label: :class:`str`
            What the bot was doing when the error was raised.
        """
        log.error('Error while trying to %s', label, exc_info=error)

        packet: BeccaTraceback = {'time': utils.utcnow(), 'label': label, 'exception': error}

        traceback_string = ''.join(format_exception(type(error), error, error.__traceback__)).replace(
            getcwd(), 'CWD'
        )

        self.errors[traceback_string] += 1

        if self.error_webhook is None:
            return

        task = create_task(self._cooldown_release(traceback_string, packet))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _cooldown_release(self, traceback: str, packet: BeccaTraceback) -> None:
        async with self._lock:
            # one release per cooldown window
            if self._most_recent:
                elapsed = utils.utcnow() - self._most_recent

                if elapsed < self.cooldown:
                    wait = (self.cooldown - elapsed).total_seconds()
                    log.debug('Waiting %s seconds to release error', wait)
                    await sleep(wait)

            self._most_recent = utils.utcnow()

            try:
                await self.release_error(traceback, packet)
            except Exception:
                log.exception('Failed to relay error "%s" to the debug webhook', packet['label'])

    async def flush(self) -> None:
        """|coro|

        Waits for every scheduled webhook release to finish.
        """

        if self._pending:
            await gather(*self._pending, return_exceptions=True)


async def handle_error(bot: "Becca", label: str, error: BaseException) -> None:
    """|coro|

    Single place every handler hands its failures to. Never raises.

    :param bot: The running client.
    :param label: Short description of what was being attempted, e.g. ``send vote message``.
    :param error: The raised exception.
    """

    manager: Optional[BeccaExceptionManager] = getattr(bot, "exceptions", None)

    try:
        if manager is None:
            log.error('Error while trying to %s', label, exc_info=error)
            return

        await manager.add_error(error=error, label=label)
    except Exception:
        log.exception('Failed to handle error while trying to %s', label)
