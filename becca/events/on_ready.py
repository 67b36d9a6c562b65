from logging import getLogger
from typing import TYPE_CHECKING

from discord import Activity, ActivityType, Status, utils

from ..templates.wrappers import error_boundary

if TYPE_CHECKING:
    from ..core import Becca

log = getLogger("becca.events")


@error_boundary("ready event")
async def on_ready(client: "Becca") -> None:
    """
    Called when the bot is ready.

    Announces the bot on the debug hook the first time only, discord.py
    fires ``ready`` again after every reconnect.
    """

    if client.start_time is not None:
        return log.warning("Skipped ready announcement: Reconnecting")

    await client.change_presence(
        activity=Activity(
            type=ActivityType.watching,
            name=f"{client.settings.PREFIX[0]}help - Becca V{client.version}"
        ),
        status=Status.online
    )

    log.info("Discord Client Logged in as %s", client.user)

    if client.debug_hook:
        await client.debug_hook.send(
            f"{client.user.name} is online in {client.settings.NODE_ENV} mode!"
        )

    client.start_time = utils.utcnow()
