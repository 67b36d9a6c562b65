from datetime import datetime as _datetime
from logging import getLogger
from time import time
from typing import TYPE_CHECKING, Optional, Tuple

from aiohttp import ClientSession
from asyncpg import create_pool
from discord import Color as _Color
from discord import Forbidden as _Forbidden
from discord import HTTPException as _HTTPException
from discord import Message, TextChannel, Webhook
from discord.ext import commands as _commands
from discord.utils import cached_property as _cached_property

from .. import __version__ as version
from ..events import register_event_handlers
from ..handlers.errorhandler import BeccaExceptionManager, handle_error
from ..server import VoteServer
from ..templates.embeds import ErrorEmbed
from ..templates.exceptions import BeccaException
from ..utils.database import RecordStore
from ..utils.functions import search_directory
from .logger import BeccaLogger as _Logger
from .settings import BotConfigs, Settings, load_settings

if TYPE_CHECKING:

    from argparse import Namespace

    from discord import AllowedMentions as _AllowedMentions
    from discord import Intents as _Intents


__all__: Tuple[str, ...] = (
    "Becca",
)


class Becca(_commands.AutoShardedBot):
    """Custom implementation of an AutoShardedBot for Becca.

    The instance is the runtime context every handler receives: it holds
    the settings, the record store, the error manager and the debug hook.
    """


    __slots__: Tuple[str, ...] = (
        "logger",
        "settings",
        "configs",
        "version",
        "start_time",
        "debug_hook",
        "exceptions",
        "vote_server",
        "session",
        "db",
        "_args",
    )

    def __init__(
            self,
            intents: "_Intents",
            allowed_mentions: "_AllowedMentions",
            args: "Namespace",
            settings: Optional[Settings] = None,
            **options
        ) -> None:
        """
        Initializes the bot with the given parameters.

        :param intents: The intents to use for the bot.
        :type intents: :class:`discord.Intents`
        :param allowed_mentions: The allowed mentions settings for the bot.
        :type allowed_mentions: :class:`discord.AllowedMentions`
        :param args: The parsed command line arguments.
        :type args: :class:`argparse.Namespace`
        :param settings: Settings to use instead of the environment ones.
        :type settings: Optional[:class:`Settings`]
        :param options: Additional options to pass to the bot.
        :type options: dict
        """

        self.settings: Settings = settings or load_settings()
        self.configs: BotConfigs = self.settings.configs
        self.version: str = version

        log_level = args.level or 20 # Defaults to logging.INFO

        self.logger = _Logger("becca.main", level=log_level)

        self.start_time: Optional[_datetime] = None
        self.debug_hook: Optional[Webhook] = None
        self.vote_server: Optional[VoteServer] = None
        self.session: Optional[ClientSession] = None
        self.db: Optional[RecordStore] = None

        self._args = args

        super().__init__(
            command_prefix=_commands.when_mentioned_or(*self.settings.PREFIX),
            owner_ids=set(self.settings.OWNERS),
            strip_after_prefix=True,
            allowed_mentions=allowed_mentions,
            intents=intents,
            case_insensitive=True,
            **options,
        )

        self.exceptions: BeccaExceptionManager = BeccaExceptionManager(self)

    async def setup_hook(self) -> None:
        """
        |coro|

        Startup in a fixed order: the database first, then the event
        handlers, extensions and finally the vote webhook server.

        :raises BeccaException: If the database can't be reached.
        """

        self.session = ClientSession()

        if self.settings.debug_hook_configured:
            self.debug_hook = Webhook.partial(
                self.settings.WH_ID,
                self.settings.WH_TOKEN,
                session=self.session
            )

        self.exceptions.error_webhook = self.debug_hook

        await self.connect_database()

        register_event_handlers(self)

        await self.load_extensions("./extensions")

        try:
            synced = await self.tree.sync()
            self.logger.info(f"Synced {len(synced)} command(s).")
        except Exception as err:
            self.logger.error("Failed to sync command tree: {}".format(err))

        if self.settings.TOPGG_AUTH:
            self.vote_server = VoteServer(
                self,
                auth=self.settings.TOPGG_AUTH,
                host=self.settings.VOTE_HOST,
                port=self.settings.VOTE_PORT
            )
            await self.vote_server.start()
        else:
            self.logger.warning("TOPGG_AUTH is not set, votes won't be received.")

    async def connect_database(self) -> None:
        """|coro|

        Creates the connection pool and the tables.
        Nothing else is set up if this fails.
        """

        log = getLogger("becca.db")

        try:
            start_time = time()
            pool = await create_pool(
                dsn=self.settings.DSN,
                host=self.settings.HOST,
                password=self.settings.PASSWORD,
                user=self.settings.USERNAME,
                database=self.settings.DATABASE_NAME,
                port=self.settings.PORT
            )

            self.db = RecordStore(pool)
            await self.db._setup()

        except Exception as err:
            self.logger.error(f"Failed to connect to the database {err}")
            raise BeccaException("Failed to connect to the database.") from err

        taked_time = round((time() - start_time) * 1000 , 3)
        log.info(f"Connected to the database in {taked_time}ms")

    async def on_command_error(self, ctx: _commands.Context, error: _commands.CommandError):
        """
        Handles errors raised during command invocation.

        :param ctx: The context in which the command was invoked.
        :type ctx: :class:`discord.ext.commands.Context`
        :param error: The exception that was raised.
        :type error: :class:`discord.ext.commands.CommandError`
        """

        if isinstance(error, _commands.CommandNotFound):
            return # type: ignore

        elif isinstance(error, _commands.NoPrivateMessage):
            text = "This command can only be used inside a server."

        elif isinstance(error, _commands.CommandOnCooldown):
            text = f'This command is on cooldown, you can use it in {round(error.retry_after, 2)}s.'

        elif isinstance(error, _commands.BadArgument):
            text = str(error)

        else:
            original = getattr(error, "original", error)
            command = ctx.command.qualified_name if ctx.command else "unknown"
            await handle_error(self, f"run the {command} command", original)

            text = "Something went wrong while running this command."

        try:
            await ctx.reply(embed=ErrorEmbed(text))

        except (_HTTPException, _Forbidden):
            pass # type: ignore

    async def on_error(self, event_method: str, /, *args, **kwargs):
        """
        Handles errors that escape event processing.

        :param event_method: The name of the event method that caused the error.
        :type event_method: str
        :param args: The positional arguments that were passed to the event.
        :type args: tuple
        :param kwargs: The keyword arguments that were passed to the event.
        :type kwargs: dict
        """

        formatted_kwargs = " ".join(f"{x}={y}" for x, y in kwargs.items())
        self.logger.error(
            f"Error in event {event_method}. Args: {args}. Kwargs: {formatted_kwargs}",
            exc_info=True,
        )

    async def load_extensions(self, path: str) -> None:
        """|coro|

        Loads all extensions from a given directory path.

        :param path: The directory path containing extensions to load.
        :type path: str
        """

        log = getLogger("becca.ext")

        for extension in search_directory(path):

            if any(extension.endswith(ignored) for ignored in self._args.ignore):
                log.info("Skipped loading Extension: {}".format(extension))
                continue


            try:
                await self.load_extension(extension)
                log.info("loaded {}".format(extension))

            except Exception as err:
                log.error("There was an error loading {}, Error: {}".format(extension, err))

    async def get_log_channel(self, message: Message) -> Optional[TextChannel]:
        """|coro|

        Returns the message log channel if ``message`` should be logged there.

        Only messages written by humans inside the log channel's guild count,
        and never the ones in the log channel itself.
        """

        channel_id = self.configs.log_channel

        if not channel_id or message.guild is None or message.author.bot:
            return None

        channel = self.get_channel(channel_id) or await self.fetch_channel(channel_id)

        if not isinstance(channel, TextChannel):
            return None

        if channel.guild.id != message.guild.id or message.channel.id == channel.id:
            return None

        return channel

    async def close(self) -> None:
        """|coro|

        Says goodbye on the debug hook, then closes everything setup_hook opened.
        """

        if self.debug_hook and self.user:
            try:
                await self.debug_hook.send(
                    f"I, {self.user.name}, am off to sleep. Goodbye."
                )
            except (_HTTPException, _Forbidden) as err:
                self.logger.warning(f"Failed to send goodbye message: {err}")

        await self.exceptions.flush()

        if self.vote_server:
            await self.vote_server.close()

        if self.db:
            await self.db.close()

        await super().close()

        if self.session:
            await self.session.close()

    def run(self):
        """Runs the bot.

        This method starts the bot using the provided settings and logging configurations.
        """

        return super().run(
            self.settings.TOKEN,
            log_handler=self.logger.handler,
            log_formatter=self.logger.formatter,
            log_level=self.logger.level,
            root_logger=self.logger.use_root
        )

    @_cached_property
    def color(self) -> _Color:
        """Retrives client's vanity color."""

        return _Color.from_rgb(*self.settings.MAIN_COLOR)
