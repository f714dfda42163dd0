import sys

import click
from click.exceptions import ClickException, FileError

EDITOR_VARIABLES_HINT = "CARGO_EDITOR, VISUAL or EDITOR"


class CargoOpenException(ClickException):
    message = "{}: {{}}".format(click.style("ERROR", fg="red", bold=True))

    def __init__(self, message=None, **kwargs):
        if not message:
            message = "cargo-open encountered a problem and had to exit."
        extra = kwargs.pop("extra", [])
        message = self.message.format(message)
        ClickException.__init__(self, message)
        self.extra = extra

    def show(self, file=None):
        if file is None:
            file = sys.stderr
        if self.extra:
            if isinstance(self.extra, str):
                self.extra = [self.extra]
            for extra in self.extra:
                click.echo(extra, file=file)
        click.echo(f"{self.message}", file=file)


class CargoOpenUsageError(click.UsageError):
    def __init__(self, message=None, ctx=None, **kwargs):
        formatted_message = "{0}: {1}"
        msg_prefix = click.style("ERROR:", fg="red", bold=True)
        if not message:
            message = "cargo-open encountered a problem and had to exit."
        message = formatted_message.format(msg_prefix, click.style(message, bold=True))
        self.message = message
        extra = kwargs.pop("extra", [])
        click.UsageError.__init__(self, message, ctx)
        self.extra = extra

    def show(self, file=None):
        if file is None:
            file = sys.stderr
        color = None
        if self.ctx is not None:
            color = self.ctx.color
        if self.extra:
            if isinstance(self.extra, str):
                self.extra = [self.extra]
            for extra in self.extra:
                click.echo(extra, file=file)
        hint = ""
        if self.cmd is not None and self.cmd.get_help_option(self.ctx) is not None:
            hint = f'Try "{self.ctx.command_path} {self.ctx.help_option_names[0]}" for help.\n'
        if self.ctx is not None:
            click.echo(self.ctx.get_usage() + "\n%s" % hint, file=file, color=color)
        click.echo(self.message, file=file)


class CargoOpenFileError(FileError):
    formatted_message = "{} {{}} {{}}".format(click.style("ERROR:", fg="red", bold=True))

    def __init__(self, filename, message=None, **kwargs):
        extra = kwargs.pop("extra", [])
        if not message:
            message = click.style("Please ensure that the file exists!", bold=True)
        message = self.formatted_message.format(
            click.style(f"{filename} not found!", bold=True), message
        )
        FileError.__init__(self, filename=filename, hint=message, **kwargs)
        self.extra = extra

    def show(self, file=None):
        if file is None:
            file = sys.stderr
        if self.extra:
            if isinstance(self.extra, str):
                self.extra = [self.extra]
            for extra in self.extra:
                click.echo(extra, file=file)
        click.echo(self.message, file=file)


class NotAProject(CargoOpenFileError):
    """No ``Cargo.lock`` in the project root."""

    def __init__(self, filename="Cargo.lock", project_directory=None, **kwargs):
        extra = kwargs.pop("extra", [])
        self.project_directory = project_directory
        location = f" in {project_directory}" if project_directory else ""
        message = "{} {}".format(
            click.style("Not a Cargo project!", bold=True, fg="red"),
            click.style(
                f"No lockfile was found{location}. Run this command from the"
                " root of a Cargo project, or run `cargo generate-lockfile` first.",
                bold=True,
            ),
        )
        super().__init__(filename, message=message, extra=extra, **kwargs)


class LockfileParseError(CargoOpenException):
    def __init__(self, path, error_text="", **kwargs):
        self.path = path
        self.error_text = error_text
        message = f"Failed parsing lockfile {path}"
        if error_text:
            message = f"{message}: {error_text}"
        CargoOpenException.__init__(self, message, **kwargs)


class LockfileVersionError(LockfileParseError):
    def __init__(self, path, version, **kwargs):
        self.version = version
        LockfileParseError.__init__(
            self,
            path,
            error_text=f"unsupported lockfile version {version!r}",
            **kwargs,
        )


class AmbiguousOrMissingPackage(CargoOpenException):
    def __init__(self, spec, message=None, **kwargs):
        self.spec = spec
        CargoOpenException.__init__(self, message, **kwargs)


class PackageNotFound(AmbiguousOrMissingPackage):
    def __init__(self, spec, suggestions=None, **kwargs):
        self.suggestions = list(suggestions or [])
        extra = kwargs.pop("extra", [])
        if self.suggestions:
            extra = extra + [
                "{} {}".format(
                    click.style("Did you mean:", fg="cyan"),
                    ", ".join(self.suggestions),
                )
            ]
        message = "package ID specification {} did not match any packages".format(
            click.style(f"`{spec}`", bold=True)
        )
        AmbiguousOrMissingPackage.__init__(self, spec, message, extra=extra, **kwargs)


class AmbiguousPackage(AmbiguousOrMissingPackage):
    def __init__(self, spec, candidates, **kwargs):
        self.candidates = list(candidates)
        extra = kwargs.pop("extra", [])
        extra = extra + [
            click.style(
                "Please re-run this command with one of the following specifications:",
                fg="cyan",
            )
        ]
        extra.extend(f"  {candidate}" for candidate in self.candidates)
        message = (
            "There are multiple {} packages in your project, and the specification"
            " {} is ambiguous.".format(
                click.style(f"`{spec}`", bold=True), click.style(f"`{spec}`", bold=True)
            )
        )
        AmbiguousOrMissingPackage.__init__(self, spec, message, extra=extra, **kwargs)


class UnsupportedSource(CargoOpenException):
    def __init__(self, package, source=None, **kwargs):
        self.package = package
        self.source = source
        if source is None:
            message = (
                f"{package} is a path dependency; it lives in your workspace,"
                " not in the Cargo cache."
            )
        else:
            message = f"Don't know where Cargo stores sources from {source!r}."
        CargoOpenException.__init__(self, message, **kwargs)


class NoEditorConfigured(CargoOpenException):
    def __init__(self, **kwargs):
        message = (
            "Cannot find an editor. Please set one of "
            f"{EDITOR_VARIABLES_HINT} in your environment."
        )
        CargoOpenException.__init__(self, message, **kwargs)


class LaunchFailed(CargoOpenException):
    def __init__(self, cmd, oserror, **kwargs):
        self.cmd = cmd
        self.oserror = oserror
        message = "Could not start editor {}: {}".format(
            click.style(f"$ {cmd}", bold=True), oserror
        )
        CargoOpenException.__init__(self, message, **kwargs)


class AbnormalExit(CargoOpenException):
    def __init__(self, cmd, exit_code, **kwargs):
        self.cmd = cmd
        # Signals are reported the way a shell reports them.
        if exit_code < 0:
            exit_code = 128 - exit_code
        self.exit_code = exit_code
        message = "Editor {} exited with status {}".format(
            click.style(f"$ {cmd}", bold=True), exit_code
        )
        CargoOpenException.__init__(self, message, **kwargs)
