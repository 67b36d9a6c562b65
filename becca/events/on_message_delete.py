from typing import TYPE_CHECKING

from discord import Message

from ..templates.embeds import MessageLogEmbed
from ..templates.wrappers import error_boundary

if TYPE_CHECKING:
    from ..core import Becca


@error_boundary("message delete event")
async def on_message_delete(client: "Becca", message: Message) -> None:

    channel = await client.get_log_channel(message)
    if channel is None:
        return

    await channel.send(embed=MessageLogEmbed.deleted(message))
