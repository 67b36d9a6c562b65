"""
Becca: A Discord bot with top.gg vote rewards

The bot listens to the Discord gateway through discord.py, keeps per-user
records (BeccaCoin balances, vote counts) in PostgreSQL and thanks people
who vote for it, or for its home server, on top.gg.

Modules:
---------
- core:
    The client, its settings and logging.

- events:
    One handler per gateway event, registered on the client at startup.

- handlers:
    The error handler every event handler reports failures to.

- modules:
    Vote notifications and the currency command handlers.

- server:
    The aiohttp app receiving top.gg vote webhooks.

- templates:
    Records, embeds, cog base class, exceptions and decorators.

- utils:
    The record store and small helpers.

Other Files:
------------
- extensions: Cogs loaded on startup, like the currency commands.
- main.py: The main entry point for starting the bot.
"""


__version__ = "1.0.0"
