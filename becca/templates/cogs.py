from typing import TYPE_CHECKING, Tuple

from discord.ext import commands as _commands

if TYPE_CHECKING:
    from ..core import Becca


class BeccaCog(_commands.Cog):
    """Base class for Becca's cogs, keeps a typed reference to the client."""

    __slots__: Tuple[str, ...] = (
        "client",
    )

    def __init__(self, client: "Becca") -> None:
        self.client: "Becca" = client
