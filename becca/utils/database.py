from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from asyncpg import Pool, Record

from ..templates.records import Currency, Voter, VoteKind

_VOTE_COLUMNS: Dict[str, str] = {
    "bot": "bot_votes",
    "server": "server_votes",
}


class RecordStore:
    def __init__(
            self,
            pool: Pool,
            /
    ) -> None:
        """Initialize the RecordStore object.

        Parameters:
        pool (asyncpg.Pool): The connection pool shared by the whole bot.

        Returns:
        None
        """

        self._pool = pool

    async def get_voter(
            self,
            user_id: int,
    ) -> Optional[Voter]:
        """Retrieve a voter record without creating it.

        Parameters:
        user_id (int): The Discord ID of the user.

        Returns:
        Optional[Voter]: The record, or None if the user never voted.

        Raises:
        asyncpg.PostgresError: If there is an error executing the query.
        """

        query = """
        SELECT * FROM voters
        WHERE user_id = $1;
        """

        record = await self._fetchrow(query, (user_id, ))

        if record is None:
            return None

        return Voter(**dict(record))

    async def get_or_create_voter(
            self,
            user_id: int,
    ) -> Voter:
        """Retrieve a voter record, creating it with zeroed counters if needed.

        Parameters:
        user_id (int): The Discord ID of the user.

        Returns:
        Voter: The stored record.

        Raises:
        asyncpg.PostgresError: If there is an error executing the query.
        """

        # The no-op update makes RETURNING yield the existing row as well.
        query = """
        INSERT INTO voters (user_id)
        VALUES ($1)
        ON CONFLICT (user_id) DO UPDATE
        SET user_id = EXCLUDED.user_id
        RETURNING *;
        """

        record = await self._fetchrow(query, (user_id, ))
        return Voter(**dict(record))

    async def increment_votes(
            self,
            user_id: int,
            kind: VoteKind,
    ) -> Voter:
        """Add one vote of the given kind to a user's record.

        The increment runs as a single upsert, concurrent votes for the same
        user are never lost.

        Parameters:
        user_id (int): The Discord ID of the voter.
        kind (str): Either ``"bot"`` or ``"server"``.

        Returns:
        Voter: The record after the increment.

        Raises:
        ValueError: If ``kind`` has no counter.
        asyncpg.PostgresError: If there is an error executing the query.
        """

        column = _VOTE_COLUMNS.get(kind)
        if column is None:
            raise ValueError(f"There is no vote counter for {kind!r} votes.")

        query = f"""
        INSERT INTO voters (user_id, {column})
        VALUES ($1, 1)
        ON CONFLICT (user_id) DO UPDATE
        SET {column} = voters.{column} + 1
        RETURNING *;
        """

        record = await self._fetchrow(query, (user_id, ))
        return Voter(**dict(record))

    async def get_or_create_currency(
            self,
            user_id: int,
    ) -> Currency:
        """Retrieve a currency record, creating an empty one if needed.

        Parameters:
        user_id (int): The Discord ID of the user.

        Returns:
        Currency: The stored record.

        Raises:
        asyncpg.PostgresError: If there is an error executing the query.
        """

        query = """
        INSERT INTO currency (user_id)
        VALUES ($1)
        ON CONFLICT (user_id) DO UPDATE
        SET user_id = EXCLUDED.user_id
        RETURNING *;
        """

        record = await self._fetchrow(query, (user_id, ))
        return Currency(**dict(record))

    async def update_currency(
            self,
            user_id: int,
            amount: int = 0,
            *,
            daily_claimed: Optional[datetime] = None,
            weekly_claimed: Optional[datetime] = None,
    ) -> Currency:
        """Add to a user's balance and stamp claim times in one statement.

        Parameters:
        user_id (int): The Discord ID of the user.
        amount (int): The number of coins to add, may be negative.
        daily_claimed (datetime): New daily claim time, left untouched if None.
        weekly_claimed (datetime): New weekly claim time, left untouched if None.

        Returns:
        Currency: The record after the update.

        Raises:
        asyncpg.PostgresError: If there is an error executing the query.
        """

        query = """
        INSERT INTO currency (user_id, currency_total, daily_claimed, weekly_claimed)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (user_id) DO UPDATE
        SET currency_total = currency.currency_total + EXCLUDED.currency_total,
            daily_claimed = COALESCE(EXCLUDED.daily_claimed, currency.daily_claimed),
            weekly_claimed = COALESCE(EXCLUDED.weekly_claimed, currency.weekly_claimed)
        RETURNING *;
        """

        record = await self._fetchrow(
            query,
            (user_id, amount, daily_claimed, weekly_claimed)
        )
        return Currency(**dict(record))

    async def _setup(
            self,

    ) -> None:
        """Set up the voters and currency tables in the database.

        Returns:
        None

        Raises:
        asyncpg.PostgresError: If there is an error executing the query.
        """

        query = """
        CREATE TABLE IF NOT EXISTS voters (
            user_id BIGINT PRIMARY KEY,
            bot_votes INTEGER NOT NULL DEFAULT 0,
            server_votes INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS currency (
            user_id BIGINT PRIMARY KEY,
            currency_total BIGINT NOT NULL DEFAULT 0,
            daily_claimed TIMESTAMPTZ,
            weekly_claimed TIMESTAMPTZ
        );
        """

        await self._pool.execute(query)

    async def __aenter__(
            self
    ) -> "RecordStore":
        """Enter the runtime context related to this object.

        Returns:
        RecordStore: The current instance of the class.
        """
        await self._setup()

        return self

    async def __aexit__(
            self,
            exc_type: Any,
            exc_val: Any,
            exc_tb: Any
    ) -> None:
        """Exit the runtime context related to this object, closing the pool."""

        await self._pool.close()

    async def close(self) -> None:
        await self._pool.close()

    async def _fetchrow(
            self,
            query: str,
            values: Sequence[Any] = (),
            /
    ) -> Optional[Record]:
        """Execute a SQL query with the provided values and return the first row.

        Parameters:
        query (str): The SQL query to execute.
        values (Sequence[Any]): The values to be used in the query (optional).

        Returns:
        Optional[asyncpg.Record]: The first row, or None if nothing matched.

        Raises:
        asyncpg.PostgresError: If there is an error executing the query.
        """

        return await self._pool.fetchrow(
            query,
            *values
        )
