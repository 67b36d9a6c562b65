from discord.ext import commands

from becca.core import Client
from becca.modules.currency import CURRENCY_HANDLERS
from becca.templates.cogs import BeccaCog


class Currency(BeccaCog):

    async def run_handler(
        self,
        ctx: commands.Context,
        name: str
    ) -> None:
        """Loads the author's record and hands it to the named currency handler."""

        data = await self.client.db.get_or_create_currency(ctx.author.id)
        handler = CURRENCY_HANDLERS[name]

        await handler(self.client, ctx, data)

    @commands.hybrid_group(
        name="currency",
        description="Earn and check your BeccaCoin.",
        aliases=["coins"],
        invoke_without_command=True
    )
    @commands.guild_only()
    async def currency(
        self,
        ctx: commands.Context
    ):
        await self.run_handler(ctx, "balance")

    @currency.command(
        name="balance",
        description="Shows how many coins you have."
    )
    async def balance(
        self,
        ctx: commands.Context
    ):
        await self.run_handler(ctx, "balance")

    @currency.command(
        name="daily",
        description="Claims your daily coins."
    )
    @commands.cooldown(1, 5, commands.BucketType.user)
    async def daily(
        self,
        ctx: commands.Context
    ):
        await self.run_handler(ctx, "daily")

    @currency.command(
        name="weekly",
        description="Claims your weekly coins."
    )
    @commands.cooldown(1, 5, commands.BucketType.user)
    async def weekly(
        self,
        ctx: commands.Context
    ):
        await self.run_handler(ctx, "weekly")


async def setup(c: Client):
    await c.add_cog(Currency(c))
