from typing import TYPE_CHECKING

from discord import Message

from ..templates.embeds import MessageLogEmbed
from ..templates.wrappers import error_boundary

if TYPE_CHECKING:
    from ..core import Becca


@error_boundary("message update event")
async def on_message_edit(client: "Becca", before: Message, after: Message) -> None:

    # Embeds resolving and pins also fire edits
    if before.content == after.content:
        return

    channel = await client.get_log_channel(after)
    if channel is None:
        return

    await channel.send(embed=MessageLogEmbed.edited(before, after))
