from datetime import datetime as _datetime
from typing import Optional as _Optional

from discord import Color as _Color
from discord import Embed as _Embed
from discord import Message as _Message
from discord.ext import commands as _commands


class SimpleEmbed(_Embed):
    """
    Discord embed with a timestamp, the client's color and an optional footer including client's name and avatar.
    """
    def __init__(
            self,
            client: _Optional[_commands.Bot] = None,
            **kwrgs
    ):
        color = getattr(client, "color", None)
        if not isinstance(color, _Color):
            color = _Color.from_rgb(47, 49, 54)

        super().__init__(
            timestamp=_datetime.now(),
            color=color,
            **kwrgs
        )

        if client and client.user:
            self.set_footer(
                text=client.user.name,
                icon_url=client.user.display_avatar
            )

class ErrorEmbed(_Embed):


    def __init__(
        self,
        error: str,
        /
    ) -> None:


        super().__init__(
            description=f":x: **{error}**",
            color=_Color.from_rgb(255, 3, 7)
        )


def _clip(content: str, limit: int = 1000) -> str:
    if not content:
        return "*No content*"

    if len(content) > limit:
        return content[:limit] + "..."

    return content


class MessageLogEmbed(_Embed):
    """Embed describing a deleted or edited message for the message log channel."""

    def __init__(
            self,
            message: _Message,
            /,
            *,
            title: str,
            color: _Color,
    ) -> None:

        super().__init__(
            title=title,
            timestamp=_datetime.now(),
            color=color,
        )

        self.set_author(
            name=str(message.author),
            icon_url=message.author.display_avatar
        )

        self.add_field(
            name="Channel",
            value=message.channel.mention  # type: ignore
        )
        self.set_footer(
            text=f"Author: {message.author.id} | Message: {message.id}"
        )

    @classmethod
    def deleted(cls, message: _Message, /) -> "MessageLogEmbed":
        embed = cls(message, title="Message Deleted", color=_Color.red())
        embed.description = _clip(message.content)

        return embed

    @classmethod
    def edited(cls, before: _Message, after: _Message, /) -> "MessageLogEmbed":
        embed = cls(after, title="Message Edited", color=_Color.orange())
        embed.add_field(name="Old Content", value=_clip(before.content), inline=False)
        embed.add_field(name="New Content", value=_clip(after.content), inline=False)
        embed.url = after.jump_url

        return embed
