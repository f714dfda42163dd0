import itertools
import re
import shlex


class ScriptEmptyError(ValueError):
    pass


def _quote_if_contains(value, pattern):
    if next(iter(re.finditer(pattern, value)), None):
        return '"{}"'.format(re.sub(r'(\\*)"', r'\1\1\\"', value))
    return value


class Script:
    """Parse an editor command line (the value of ``$EDITOR`` and friends).

    This always works in POSIX mode, even on Windows, so ``code --wait``
    becomes the command ``code`` with the argument ``--wait``.
    """

    def __init__(self, command, args=None):
        self._parts = [command]
        if args:
            self._parts.extend(args)

    @classmethod
    def parse(cls, value):
        if isinstance(value, str):
            value = shlex.split(value)
        if not value:
            raise ScriptEmptyError(value)
        return cls(value[0], value[1:])

    def __repr__(self):
        return f"Script({self._parts!r})"

    def __eq__(self, other):
        if not isinstance(other, Script):
            return NotImplemented
        return self._parts == other._parts

    @property
    def command(self):
        return self._parts[0]

    @property
    def args(self):
        return self._parts[1:]

    def with_args(self, extra_args):
        """Return a new script with *extra_args* appended, leaving this one untouched."""
        return Script(self.command, [*self.args, *extra_args])

    def cmdify(self):
        """Encode into a cmd-executable string.

        This re-implements CreateProcess's quoting logic to turn a list of
        arguments into one single string for the shell to interpret.

        * All double quotes are escaped with a backslash.
        * Existing backslashes before a quote are doubled, so they are all
          escaped properly.
        * Backslashes elsewhere are left as-is; cmd will interpret them
          literally.

        The result is then quoted into a pair of double quotes to be grouped.

        An argument is intentionally not quoted if it does not contain
        foul characters. This is done to be compatible with Windows built-in
        commands that don't work well with quotes, e.g. everything with `echo`,
        and DOS-style (forward slash) switches.

        Foul characters include:

        * Whitespaces.
        * Carets (^).
        * Parentheses in the command.

        The result is used for display in messages and logs; commands are
        always run from the argument list, never through a shell.
        """
        return " ".join(
            itertools.chain(
                [_quote_if_contains(self.command, r"[\s^()]")],
                (_quote_if_contains(arg, r"[\s^]") for arg in self.args),
            )
        )
