from .client import Becca
from .client import Becca as Client
from .logger import BeccaLogger as Logger
from .settings import BotConfigs, Settings, load_settings
