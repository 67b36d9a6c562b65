from datetime import datetime, timedelta
from random import randint
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Optional

from discord import utils
from discord.ext import commands

from ..templates.embeds import SimpleEmbed
from ..templates.records import Currency
from ..utils.config import Emojis

if TYPE_CHECKING:
    from ..core import Becca

_emojis = Emojis()
coin = _emojis.get("coin") or "🪙"

CurrencyHandler = Callable[["Becca", commands.Context, Currency], Awaitable[None]]

DAILY_COOLDOWN = timedelta(days=1)
WEEKLY_COOLDOWN = timedelta(days=7)
DAILY_RANGE = (1, 10)
WEEKLY_REWARD = 50


def remaining_cooldown(
        claimed: Optional[datetime],
        cooldown: timedelta,
        now: Optional[datetime] = None
) -> Optional[timedelta]:
    """Time left before a reward can be claimed again, ``None`` if it can be claimed now."""

    if claimed is None:
        return None

    now = now or utils.utcnow()
    left = claimed + cooldown - now

    if left <= timedelta(0):
        return None

    return left


def _format_cooldown(left: Optional[timedelta]) -> str:
    if left is None:
        return "now"

    return utils.format_dt(utils.utcnow() + left, style="R")


async def handle_balance(client: "Becca", ctx: commands.Context, data: Currency) -> None:
    embed = SimpleEmbed(client=client, title=f"{ctx.author.display_name}'s balance")
    embed.description = f"{coin} **{data.currency_total}** BeccaCoin"

    embed.add_field(
        name="Daily",
        value=_format_cooldown(remaining_cooldown(data.daily_claimed, DAILY_COOLDOWN))
    )
    embed.add_field(
        name="Weekly",
        value=_format_cooldown(remaining_cooldown(data.weekly_claimed, WEEKLY_COOLDOWN))
    )

    await ctx.reply(embed=embed)


async def handle_daily(client: "Becca", ctx: commands.Context, data: Currency) -> None:
    left = remaining_cooldown(data.daily_claimed, DAILY_COOLDOWN)

    if left is not None:
        await ctx.reply(f"You already claimed your daily coins, come back {_format_cooldown(left)}.")
        return

    earned = randint(*DAILY_RANGE)
    updated = await client.db.update_currency(
        data.user_id,
        earned,
        daily_claimed=utils.utcnow()
    )

    await ctx.reply(
        f"{coin} You earned **{earned}** BeccaCoin! "
        f"You now have **{updated.currency_total}**."
    )


async def handle_weekly(client: "Becca", ctx: commands.Context, data: Currency) -> None:
    left = remaining_cooldown(data.weekly_claimed, WEEKLY_COOLDOWN)

    if left is not None:
        await ctx.reply(f"You already claimed your weekly coins, come back {_format_cooldown(left)}.")
        return

    updated = await client.db.update_currency(
        data.user_id,
        WEEKLY_REWARD,
        weekly_claimed=utils.utcnow()
    )

    await ctx.reply(
        f"{coin} You earned **{WEEKLY_REWARD}** BeccaCoin! "
        f"You now have **{updated.currency_total}**."
    )


CURRENCY_HANDLERS: Dict[str, CurrencyHandler] = {
    "balance": handle_balance,
    "daily": handle_daily,
    "weekly": handle_weekly,
}
