import os
import shutil
from pathlib import Path

import click

from cargo_open.utils.constants import FALSE_VALUES, TRUE_VALUES


def normalize_path(path, base=None):
    """Absolutize *path* against *base* (the working directory by default)."""
    loc = Path(path).expanduser()
    if not loc.is_absolute():
        loc = Path(base or os.getcwd()) / loc
    try:
        loc = loc.resolve()
    except OSError:
        loc = loc.absolute()
    return loc


def style_no_color(text, fg=None, bg=None, **kwargs) -> str:
    """Wrap click style to ignore colors."""
    if hasattr(click, "original_style"):
        return click.original_style(text, **kwargs)
    return click.style(text, **kwargs)


def env_to_bool(val):
    """
    Convert **val** to boolean, returning True if truthy or False if falsey

    :param Any val: The value to convert
    :return: False if falsey, True if truthy
    :rtype: bool
    :raises:
        ValueError: if val is not a valid boolean-like
    """
    if val is None:
        return False
    if isinstance(val, bool):
        return val

    try:
        if val.lower() in FALSE_VALUES:
            return False
        if val.lower() in TRUE_VALUES:
            return True
    except AttributeError:
        pass

    raise ValueError(f"Value is not a valid boolean-like: {val}")


def system_which(command, path=None):
    """Emulates the system's which. Returns None if not found."""
    return shutil.which(command, path=path)

