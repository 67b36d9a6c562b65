from typing import TYPE_CHECKING

from discord import Message

from ..templates.wrappers import error_boundary

if TYPE_CHECKING:
    from ..core import Becca

DM_NOTICE = (
    "Hello! I only respond to commands inside servers. "
    "Invite me to yours or come find me in my home server!"
)


@error_boundary("message send event")
async def on_message(client: "Becca", message: Message) -> None:
    """
    Guild messages go on to command processing, DMs get a short notice.
    """

    if message.author.bot:
        return

    if message.guild is None:
        await message.channel.send(DM_NOTICE)
        return

    await client.process_commands(message)
