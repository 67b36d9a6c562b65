from hmac import compare_digest
from json import JSONDecodeError
from logging import getLogger
from typing import TYPE_CHECKING, Optional, Tuple

from aiohttp import web
from pydantic import ValidationError

from ..modules.votes import send_vote_message
from ..templates.records import VoteNotification

if TYPE_CHECKING:
    from ..core import Becca

__all__: Tuple[str, ...] = (
    "VoteServer",
    "create_app",
)

log = getLogger("becca.server")

CLIENT_KEY = web.AppKey("client", object)
AUTH_KEY = web.AppKey("auth", str)


async def receive_vote(request: web.Request) -> web.Response:
    """Handles a top.gg webhook call: ``POST /votes``."""

    auth = request.headers.get("Authorization", "")
    if not compare_digest(auth.encode(), request.app[AUTH_KEY].encode()):
        log.warning("Rejected vote webhook call from %s", request.remote)
        raise web.HTTPUnauthorized()

    try:
        payload = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        raise web.HTTPBadRequest(text="Body must be JSON.")

    if not isinstance(payload, dict):
        raise web.HTTPBadRequest(text="Body must be a JSON object.")

    try:
        notification = VoteNotification.from_payload(payload)
    except (ValueError, ValidationError) as err:
        raise web.HTTPBadRequest(text=str(err))

    log.debug("Received %s vote for user %s", notification.kind, notification.user_id)

    await send_vote_message(request.app[CLIENT_KEY], notification)  # type: ignore

    return web.Response(status=204)


def create_app(client: "Becca", auth: str) -> web.Application:
    app = web.Application()
    app[CLIENT_KEY] = client
    app[AUTH_KEY] = auth

    app.router.add_post("/votes", receive_vote)

    return app


class VoteServer:
    """Runs the vote webhook app on the bot's event loop."""

    __slots__: Tuple[str, ...] = (
        "app",
        "host",
        "port",
        "_runner",
    )

    def __init__(
            self,
            client: "Becca",
            *,
            auth: str,
            host: str,
            port: int
    ) -> None:

        self.app = create_app(client, auth)
        self.host = host
        self.port = port
        self._runner: Optional[web.AppRunner] = None

    async def start(self) -> None:
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()

        log.info("Listening for votes on %s:%s", self.host, self.port)

    async def close(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
