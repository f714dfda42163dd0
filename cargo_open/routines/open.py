import logging

from rich.markup import escape

from cargo_open.editor import launch, select_editor
from cargo_open.utils import console, err

logger = logging.getLogger(__name__)


def do_open(project, package_name, print_path=False):
    """Open the unpacked sources of *package_name* in the user's editor.

    Returns the exit status for the command line: the editor's, or 0 when only
    printing the path.
    """
    package = project.resolve_package(package_name)
    path = project.source_path(package)
    if print_path:
        console.print(str(path), markup=False, soft_wrap=True)
        return 0
    if not path.is_dir():
        # Not fetched yet, or Cargo changed its cache layout.
        err.print(
            f"[bold yellow]Warning:[/bold yellow] {escape(str(path))} does not exist."
            " Try running [bold]cargo fetch[/bold] first.",
            soft_wrap=True,
        )
    editor = select_editor(project.s)
    err.print(
        f"Opening {escape(repr(str(path)))} in your editor.", style="bold", soft_wrap=True
    )
    return launch(editor, path)
