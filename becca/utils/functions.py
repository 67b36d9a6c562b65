from pathlib import Path as _Path
from pkgutil import iter_modules as _iter_modules
from typing import Iterator as _Iterator
from typing import Union as _Union

from yaml import SafeLoader as _SafeLoader
from yaml import load as _load


def search_directory(path: _Union[str, _Path]) -> _Iterator[str]:
    """Yield the dotted name of every extension module below ``path``.

    Every subdirectory is walked, with or without an ``__init__.py``.
    Files and directories starting with ``_`` or ``.`` are skipped.

    Parameters
    ----------
    path: :class:`str`
        A directory inside the current working directory.

    Yields
    ------
    :class:`str`
        A name usable in :meth:`discord.ext.commands.Bot.load_extension`.

    Raises
    ------
    ValueError
        If ``path`` is outside the cwd or is not a directory.
    """

    directory = _Path(path).resolve()
    cwd = _Path.cwd().resolve()

    if cwd != directory and cwd not in directory.parents:
        raise ValueError(f"Extensions must live inside {cwd}, got {directory}")

    if not directory.is_dir():
        raise ValueError(f"Provided path '{directory}' is not a directory")

    parts = directory.relative_to(cwd).parts
    prefix = ".".join(parts) + "." if parts else ""

    for module in sorted(_iter_modules([str(directory)]), key=lambda m: m.name):
        if not module.ispkg and not module.name.startswith("_"):
            yield prefix + module.name

    for sub in sorted(directory.iterdir()):
        if sub.is_dir() and not sub.name.startswith(("_", ".")):
            yield from search_directory(sub)


def load_yaml(path: _Union[str, _Path]) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return _load(f, Loader=_SafeLoader)
