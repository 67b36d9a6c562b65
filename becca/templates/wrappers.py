from functools import wraps
from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

from ..handlers.errorhandler import handle_error

if TYPE_CHECKING:
    from ..core import Becca

Handler = TypeVar("Handler", bound=Callable[..., Awaitable[None]])


def error_boundary(
        label: str
) -> Callable[[Handler], Handler]:
    """
    Decorator that keeps errors inside an event handler.

    The wrapped coroutine must take the client as its first argument.
    Anything it raises is handed to :func:`handle_error` under ``label``
    and the wrapper returns ``None``.
    """

    def decorator(coro: Handler) -> Handler:

        @wraps(coro)
        async def wrapper(*args: Any, **kwargs: Any) -> None:

            client: "Becca" = args[0]

            try:
                await coro(*args, **kwargs)
            except Exception as err:
                await handle_error(client, label, err)

        return wrapper  # type: ignore

    return decorator
