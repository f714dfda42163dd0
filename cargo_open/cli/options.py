import logging

from click import Group, make_pass_decorator, option
from click import types as click_types

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "auto_envvar_prefix": "CARGO_OPEN",
}


class CargoOpenGroup(Group):
    """Custom Group class for the cargo-open command line."""

    def main(self, *args, **kwargs):
        """
        to specify the windows_expand_args option to avoid exceptions on Windows
        see: https://github.com/pallets/click/issues/1901
        """
        return super().main(*args, **kwargs, windows_expand_args=False)


class State:
    def __init__(self):
        self.manifest_dir = None
        self._project = None

    @property
    def project(self):
        if self._project is None:
            from cargo_open.project import Project

            self._project = Project(self.manifest_dir)
            if self._project.s.is_verbose():
                enable_verbose_logging()
        return self._project


pass_state = make_pass_decorator(State, ensure=True)


def enable_verbose_logging():
    logging.getLogger("cargo_open").setLevel(logging.DEBUG)


def verbose_option(f):
    def callback(ctx, param, value):
        if value:
            enable_verbose_logging()
        return value

    return option(
        "--verbose",
        "-v",
        is_flag=True,
        expose_value=False,
        callback=callback,
        help="Verbose mode.",
        type=click_types.BOOL,
    )(f)


def manifest_dir_option(f):
    def callback(ctx, param, value):
        state = ctx.ensure_object(State)
        if value is not None:
            state.manifest_dir = value
        return value

    return option(
        "--manifest-dir",
        "-C",
        default=None,
        expose_value=False,
        envvar="CARGO_OPEN_MANIFEST_DIR",
        callback=callback,
        help="Directory containing the project's Cargo.lock (defaults to the current directory).",
        type=click_types.Path(file_okay=False),
    )(f)


def common_options(f):
    f = manifest_dir_option(f)
    f = verbose_option(f)
    return f
