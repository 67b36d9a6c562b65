from datetime import datetime
from typing import Tuple, TypedDict

from discord.errors import ClientException


class BeccaException(ClientException):

    __slots__: Tuple[str, ...] = ()


class BeccaTraceback(TypedDict):
    time: datetime
    label: str
    exception: BaseException
