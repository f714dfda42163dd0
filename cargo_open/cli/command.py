from click import argument, group, option, pass_context, version_option
from rich.markup import escape

from cargo_open.__version__ import __version__
from cargo_open.cli.options import (
    CONTEXT_SETTINGS,
    CargoOpenGroup,
    common_options,
    pass_state,
)
from cargo_open.utils import console, err
from cargo_open.utils.constants import EDITOR_VARIABLES


@group(cls=CargoOpenGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@option("--where", is_flag=True, default=False, help="Output project home information.")
@option(
    "--envs", is_flag=True, default=False, help="Output Environment Variable options."
)
@option(
    "--support",
    is_flag=True,
    help="Output diagnostic information for use in GitHub issues.",
)
@common_options
@version_option(prog_name="cargo-open", version=__version__)
@pass_state
@pass_context
def cli(
    ctx,
    state,
    where=False,
    envs=False,
    support=None,
    **kwargs,
):
    """Open the source of a crate your project depends on in your editor."""
    if envs:
        console.print(
            "The following environment variables can be set, to do various things:\n"
        )
        for key in (*EDITOR_VARIABLES, "CARGO_HOME", "CARGO_OPEN_VERBOSE"):
            console.print(f"  - {key}", style="bold")
        console.print(
            "\nThe first of CARGO_EDITOR, VISUAL and EDITOR that is set picks the editor."
        )
        return 0
    if ctx.invoked_subcommand is None:
        # --where was passed...
        if where:
            project = state.project
            console.print(project.project_directory, markup=False, soft_wrap=True)
            if project.lockfile_exists:
                console.print(project.lockfile_location, markup=False, soft_wrap=True)
            else:
                err.print(
                    "[red]No Cargo.lock in[/red]"
                    f" [bold]{escape(project.project_directory)}[/bold]",
                    soft_wrap=True,
                )
                ctx.exit(1)
            return 0
        # --support was passed...
        elif support:
            from cargo_open.help import get_cargo_open_diagnostics

            get_cargo_open_diagnostics(state.project)
            return 0
        console.print(ctx.get_help(), markup=False)


@cli.command(
    short_help="Open a dependency's source in your editor.",
    name="open",
    context_settings=CONTEXT_SETTINGS,
)
@common_options
@option(
    "--print-path",
    is_flag=True,
    default=False,
    help="Print the source directory instead of opening it.",
)
@argument("crate", nargs=1)
@pass_state
def run_open(state, crate, print_path=False, **kwargs):
    """Open a dependency's source in your editor.

    CRATE is a crate name from Cargo.lock, optionally with a version
    (serde@1.0.200) when several versions are locked.

    The editor is taken from CARGO_EDITOR, VISUAL or EDITOR, in that order.
    You can temporarily override it, for example:

        CARGO_EDITOR=code cargo open serde
    """
    from cargo_open.routines.open import do_open

    return do_open(state.project, crate, print_path=print_path)


if __name__ == "__main__":
    cli()
