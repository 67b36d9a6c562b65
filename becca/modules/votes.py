from logging import getLogger
from typing import TYPE_CHECKING

from discord import TextChannel

from ..handlers.errorhandler import handle_error
from ..templates.records import VoteNotification

if TYPE_CHECKING:
    from ..core import Becca

log = getLogger("becca.votes")

VOTE_INTERVAL_HOURS = 12


def format_vote_message(user_id: int, kind: str, count: int) -> str:
    return (
        f"Hey <@!{user_id}>! Thanks for voting for the {kind} on top.gg! "
        f"Remember to vote again in {VOTE_INTERVAL_HOURS} hours!"
        f"\n\nYou have voted {count} times!"
    )


async def send_vote_message(
        client: "Becca",
        notification: VoteNotification
) -> None:
    """|coro|

    Records a top.gg vote and thanks the voter in the vote channel.

    Unknown votes are ignored, and so is a vote channel that can't take
    text messages. Failures end up in the error handler, this never raises.

    :param client: The running client.
    :param notification: The vote received from top.gg.
    """

    if notification.kind == "unknown":
        return

    try:
        guild = await client.fetch_guild(client.configs.home_guild)
        channel = await guild.fetch_channel(client.configs.vote_channel)

        if not isinstance(channel, TextChannel):
            return

        voter = await client.db.increment_votes(notification.user_id, notification.kind)

        log.info(
            "Recorded %s vote from %s (%s total)",
            notification.kind,
            notification.user_id,
            voter.votes_for(notification.kind)
        )

        await channel.send(
            content=format_vote_message(
                notification.user_id,
                notification.kind,
                voter.votes_for(notification.kind)
            )
        )

    except Exception as err:
        await handle_error(client, "send vote message", err)
