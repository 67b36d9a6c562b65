from os import environ
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotConfigs(BaseModel):
    """IDs the handlers need at runtime, read-only once the bot is up."""

    model_config = ConfigDict(frozen=True)

    home_guild: int
    vote_channel: int
    log_channel: Optional[int] = None


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_ignore_empty=False,
        extra="allow",
    )

    # Main Vars
    TOKEN: str
    OWNERS: List[int] = []
    MAIN_COLOR: List[int] = [47, 49, 54]
    PREFIX: List[str] = ["becca!"]
    NODE_ENV: str = "development"

    # Debug channel hook, both parts are needed
    WH_ID: Optional[int] = None
    WH_TOKEN: Optional[str] = None

    HOME_GUILD: int
    VOTE_CHANNEL: int
    LOG_CHANNEL: Optional[int] = None

    # top.gg vote webhook
    TOPGG_AUTH: Optional[str] = None
    VOTE_HOST: str = "0.0.0.0"
    VOTE_PORT: int = 8080

    DSN: Optional[str] = None

    DATABASE_NAME: Optional[str] = None

    HOST: Optional[str] = None
    PORT: Optional[int] = None

    USERNAME: Optional[str] = None
    PASSWORD: Optional[str] = None

    @property
    def configs(self) -> BotConfigs:
        return BotConfigs(
            home_guild=self.HOME_GUILD,
            vote_channel=self.VOTE_CHANNEL,
            log_channel=self.LOG_CHANNEL,
        )

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def debug_hook_configured(self) -> bool:
        return bool(self.WH_ID and self.WH_TOKEN)


def load_settings(**overrides) -> Settings:
    """Builds the settings, reading ``.env`` unless running in production."""

    node_env = overrides.get("NODE_ENV") or environ.get("NODE_ENV", "development")

    if node_env != "production":
        return Settings(_env_file=".env", **overrides)

    return Settings(_env_file=None, **overrides)
