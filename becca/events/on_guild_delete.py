from typing import TYPE_CHECKING

from discord import Guild

from ..templates.wrappers import error_boundary

if TYPE_CHECKING:
    from ..core import Becca


@error_boundary("guild delete event")
async def on_guild_remove(client: "Becca", guild: Guild) -> None:

    if not client.debug_hook:
        return

    await client.debug_hook.send(
        f"💔 I have been removed from **{guild.name}** (`{guild.id}`)"
    )
