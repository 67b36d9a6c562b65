from datetime import datetime, timezone
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

VoteKind = Literal["bot", "server", "unknown"]


class Voter(BaseModel):
    """A user's vote counters, one per kind of top.gg listing."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    bot_votes: int = Field(default=0, ge=0)
    server_votes: int = Field(default=0, ge=0)

    def votes_for(self, kind: VoteKind) -> int:
        return self.bot_votes if kind == "bot" else self.server_votes


class Currency(BaseModel):
    """A user's coin balance and the last time each reward was claimed."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    currency_total: int = 0
    daily_claimed: Optional[datetime] = None
    weekly_claimed: Optional[datetime] = None


class VoteNotification(BaseModel):
    """A single vote received from top.gg.

    Only lives for the duration of one dispatch, nothing about it is stored.
    """

    model_config = ConfigDict(frozen=True)

    kind: VoteKind
    user_id: int
    type: str = "upvote"
    is_weekend: StrictBool = False
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "VoteNotification":
        """Builds a notification from a top.gg webhook body.

        Bot votes carry a ``bot`` key and server votes a ``guild`` key,
        anything else is kept as an ``unknown`` vote so it gets filtered
        out by the dispatcher instead of failing here.

        :raises ValueError: If ``user`` is missing or not a snowflake.
        :raises pydantic.ValidationError: If ``isWeekend`` is not a boolean.
        """

        if payload.get("bot"):
            kind = "bot"
        elif payload.get("guild"):
            kind = "server"
        else:
            kind = "unknown"

        user = payload.get("user")
        if user is None or not str(user).isdigit():
            raise ValueError(f"Invalid user id in vote payload: {user!r}")

        return cls(
            kind=kind,
            user_id=int(user),
            type=str(payload.get("type") or "upvote"),
            is_weekend=payload.get("isWeekend", False),
        )
