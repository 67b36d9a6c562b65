from logging import getLogger
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Tuple

from .on_guild_create import on_guild_join
from .on_guild_delete import on_guild_remove
from .on_message import on_message
from .on_message_delete import on_message_delete
from .on_message_update import on_message_edit
from .on_ready import on_ready

if TYPE_CHECKING:
    from ..core import Becca

__all__: Tuple[str, ...] = (
    "EVENT_HANDLERS",
    "register_event_handlers",
)

log = getLogger("becca.events")

# ``ready`` first, the rest in gateway order.
EVENT_HANDLERS: Tuple[Tuple[str, Callable[..., Awaitable[None]]], ...] = (
    ("on_ready", on_ready),
    ("on_guild_join", on_guild_join),
    ("on_guild_remove", on_guild_remove),
    ("on_message", on_message),
    ("on_message_delete", on_message_delete),
    ("on_message_edit", on_message_edit),
)


def _bind(client: "Becca", name: str, handler: Callable[..., Awaitable[None]]):

    async def listener(*args: Any) -> None:
        await handler(client, *args)

    listener.__name__ = name
    listener.__qualname__ = name

    return listener


def register_event_handlers(client: "Becca") -> None:
    """
    Registers one handler per gateway event on the client.

    :meth:`discord.Client.event` replaces the ``on_<event>`` attribute, so
    each event ends up with exactly one callback even if this runs twice.
    """

    for name, handler in EVENT_HANDLERS:
        client.event(_bind(client, name, handler))

    log.info("Registered %s event handlers", len(EVENT_HANDLERS))
