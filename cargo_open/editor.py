"""Pick the user's editor from the environment and run it on a directory."""

import logging

from cargo_open.cmdparse import Script, ScriptEmptyError
from cargo_open.environments import Setting
from cargo_open.exceptions import AbnormalExit, LaunchFailed, NoEditorConfigured
from cargo_open.utils.processes import subprocess_run
from cargo_open.utils.shell import system_which

logger = logging.getLogger(__name__)


def select_editor(environ=None) -> Script:
    """Return the editor command configured in *environ*.

    ``CARGO_EDITOR`` wins over ``VISUAL``, which wins over ``EDITOR``. Unset and
    blank variables are skipped.

    :param environ: Mapping to read instead of ``os.environ``.
    :raises NoEditorConfigured: If none of the three is usable.
    """
    settings = environ if isinstance(environ, Setting) else Setting(environ)
    for name, value in settings.editor_variables():
        if value is None:
            continue
        try:
            script = Script.parse(value)
        except ScriptEmptyError:
            continue
        except ValueError as e:
            # Unbalanced quotes: run the value as one command, unsplit.
            logger.debug("Could not split %s=%r: %s", name, value, e)
            script = Script(value.strip())
        logger.debug("Using editor from %s: %s", name, script.cmdify())
        return script
    raise NoEditorConfigured()


def launch(command: Script, path) -> int:
    """Run *command* with *path* as its last argument and wait for it to exit.

    The editor inherits this process's terminal. There is no timeout.

    :raises LaunchFailed: If the editor cannot be started.
    :raises AbnormalExit: If the editor exits with a non-zero status.
    """
    script = command.with_args([str(path)])
    logger.debug("Running %s", script.cmdify())
    # Resolves PATHEXT wrappers such as code.cmd on Windows.
    executable = system_which(script.command) or script.command
    try:
        c = subprocess_run([executable, *script.args])
    except OSError as e:
        raise LaunchFailed(script.cmdify(), e) from e
    if c.returncode:
        raise AbnormalExit(script.cmdify(), c.returncode)
    return c.returncode
