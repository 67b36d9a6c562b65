from typing import TYPE_CHECKING

from discord import Guild

from ..templates.wrappers import error_boundary

if TYPE_CHECKING:
    from ..core import Becca


@error_boundary("guild create event")
async def on_guild_join(client: "Becca", guild: Guild) -> None:

    if not client.debug_hook:
        return

    await client.debug_hook.send(
        f"🔰 I have joined **{guild.name}** (`{guild.id}`)\n"
        f"👑 **Owner**: `{guild.owner_id}`\n"
        f"🔢 **Members**: `{guild.member_count}`\n"
        f"📊 **Servers**: `{len(client.guilds)}`"
    )
