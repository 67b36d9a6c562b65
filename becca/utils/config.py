from os import path as _path
from typing import Any, Union

from .functions import load_yaml

DATA_DIR = _path.join(_path.dirname(_path.dirname(__file__)), "data")


class Emojis:

    def __init__(self, file: str = _path.join(DATA_DIR, "emojis.yml")) -> None:

        self._config = load_yaml(file) or {}

    def get(
            self,
            key: str,
            /
    ) -> Union[None, Any]:

        return self._config.get(key)
