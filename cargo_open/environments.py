import os
from pathlib import Path

from cargo_open.utils.constants import DEFAULT_CARGO_HOME_NAME, EDITOR_VARIABLES
from cargo_open.utils.shell import env_to_bool


def get_from_env(
    arg, prefix="CARGO_OPEN", check_for_negation=True, default=None, environ=None
):
    """
    Check the environment for a variable, returning its truthy or stringified value

    For example, setting ``CARGO_OPEN_NO_VERBOSE=1`` would mean that
    ``get_from_env("VERBOSE", prefix="CARGO_OPEN")`` would return ``False``.

    :param str arg: The name of the variable to look for
    :param str prefix: The prefix to attach to the variable, defaults to "CARGO_OPEN"
    :param bool check_for_negation: Whether to check for ``<PREFIX>_NO_<arg>``, defaults
        to True
    :param Optional[Union[str, bool]] default: The value to return if the environment variable does
        not exist, defaults to None
    :param Optional[Mapping[str, str]] environ: The environment to read, defaults to
        ``os.environ``
    :return: The value from the environment if available
    :rtype: Optional[Union[str, bool]]
    """
    if environ is None:
        environ = os.environ
    negative_lookup = f"NO_{arg}"
    positive_lookup = arg
    if prefix:
        positive_lookup = f"{prefix}_{arg}"
        negative_lookup = f"{prefix}_{negative_lookup}"
    if positive_lookup in environ:
        value = environ[positive_lookup]
        try:
            return env_to_bool(value)
        except ValueError:
            return value
    if check_for_negation and negative_lookup in environ:
        value = environ[negative_lookup]
        try:
            return not env_to_bool(value)
        except ValueError:
            return value
    return default


def _non_empty(value):
    if value is None or not value.strip():
        return None
    return value


class Setting:
    """
    Control various settings of cargo-open via environment variables.

    Every lookup goes through ``environ`` (``os.environ`` unless one is given),
    so callers can hand in a plain dict instead of touching the process
    environment.
    """

    def __init__(self, environ=None) -> None:
        if environ is None:
            environ = os.environ
        self.environ = environ

        #: Override for the editor, takes precedence over VISUAL and EDITOR.
        self.CARGO_EDITOR = _non_empty(environ.get("CARGO_EDITOR"))

        #: The user's visual editor.
        self.VISUAL = _non_empty(environ.get("VISUAL"))

        #: The user's line editor, used when nothing else is set.
        self.EDITOR = _non_empty(environ.get("EDITOR"))

        self.CARGO_HOME = _non_empty(environ.get("CARGO_HOME"))
        """Where Cargo keeps its registry index, downloads and unpacked sources.

        Default is ``$HOME/.cargo``.
        """

        self.HOME = _non_empty(environ.get("HOME"))

        # Internal, consolidated verbosity representation as an integer. The default
        # level is 0, increased for wordiness.
        try:
            self.CARGO_OPEN_VERBOSITY = int(get_from_env("VERBOSITY", environ=environ))
        except (ValueError, TypeError):
            verbose = get_from_env("VERBOSE", environ=environ)
            self.CARGO_OPEN_VERBOSITY = 1 if verbose is True else 0

    def is_verbose(self, threshold=1):
        return threshold <= self.CARGO_OPEN_VERBOSITY

    def editor_variables(self):
        """Return ``(name, value)`` pairs for the editor variables, highest priority first."""
        return [(name, getattr(self, name)) for name in EDITOR_VARIABLES]

    @property
    def cargo_home(self) -> Path:
        if self.CARGO_HOME:
            return Path(self.CARGO_HOME)
        home = Path(self.HOME) if self.HOME else Path.home()
        return home / DEFAULT_CARGO_HOME_NAME


NO_COLOR = False
if os.getenv("NO_COLOR"):
    NO_COLOR = True
    import click

    from cargo_open.utils.shell import style_no_color

    click.original_style = click.style
    click.style = style_no_color
