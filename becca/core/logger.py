import logging
from typing import Tuple, Union

from discord.utils import _ColourFormatter, stream_supports_colour


class BeccaLogger(logging.Logger):
    """Logger that also carries the handler and formatter handed to
    :meth:`discord.Client.run`, so discord.py and Becca share one output."""

    __slots__: Tuple[str, ...] = (
        "handler",
        "formatter",
        "use_root",
    )

    def __init__(self, name: str, level: Union[int, str] = logging.INFO) -> None:
        super().__init__(name, level)

        self.handler = logging.StreamHandler()

        if stream_supports_colour(self.handler.stream):
            self.formatter = _ColourFormatter()
        else:
            self.formatter = logging.Formatter(
                "[{asctime}] [{levelname:<8}] {name}: {message}",
                "%Y-%m-%d %H:%M:%S",
                style="{",
            )

        self.handler.setFormatter(self.formatter)
        self.addHandler(self.handler)

        # passed as ``root_logger`` to Client.run
        self.use_root = True
        self.propagate = False
