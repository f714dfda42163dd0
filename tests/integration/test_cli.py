import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from cargo_open import cli
from cargo_open.__version__ import __version__
from cargo_open.utils.shell import system_which


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, cargo_project, cargo_home):
    def _invoke(*args, **env):
        env.setdefault("CARGO_HOME", str(cargo_home))
        return runner.invoke(cli, ["-C", str(cargo_project), *args], env=env)

    return _invoke


@pytest.mark.cli
def test_bare_invocation_prints_help(runner):
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "open" in result.output


@pytest.mark.cli
def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"cargo-open, version {__version__}"


@pytest.mark.cli
def test_envs(runner):
    result = runner.invoke(cli, ["--envs"])
    assert result.exit_code == 0
    for name in ("CARGO_EDITOR", "VISUAL", "EDITOR", "CARGO_HOME"):
        assert name in result.output


@pytest.mark.cli
def test_where(invoke, cargo_project):
    result = invoke("--where")
    assert result.exit_code == 0
    assert str(cargo_project.resolve() / "Cargo.lock") in result.output


@pytest.mark.cli
def test_where_without_lockfile(runner, tmp_path):
    result = runner.invoke(cli, ["--where", "-C", str(tmp_path)])
    assert result.exit_code == 1
    assert "No Cargo.lock" in result.output


@pytest.mark.cli
def test_support(invoke):
    result = invoke("--support")
    assert result.exit_code == 0
    assert "cargo-open version" in result.output


@pytest.mark.cli
def test_open_print_path(runner, cargo_project, cargo_home):
    result = runner.invoke(
        cli,
        ["open", "-C", str(cargo_project), "--print-path", "foo"],
        env={"CARGO_HOME": str(cargo_home)},
    )
    assert result.exit_code == 0, result.output
    path = Path(result.output.strip())
    assert path.name == "foo-1.2.3"
    assert path.parent.name.startswith("example.com-")
    assert path.parents[2] == cargo_home / "registry"


@pytest.mark.cli
def test_open_print_path_manifest_dir_from_environment(
    runner, cargo_project, cargo_home
):
    result = runner.invoke(
        cli,
        ["open", "--print-path", "rand@0.7.3"],
        env={
            "CARGO_HOME": str(cargo_home),
            "CARGO_OPEN_MANIFEST_DIR": str(cargo_project),
        },
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(
        cargo_home / "registry" / "src" / "github.com-1ecc6299db9ec823" / "rand-0.7.3"
    )


@pytest.mark.cli
def test_open_git_dependency_print_path(invoke, cargo_home):
    result = invoke("open", "--print-path", "gitdep")
    assert result.exit_code == 0, result.output
    path = Path(result.output.strip())
    assert path.name == "0123456"
    assert path.parent.name.startswith("gitdep-")
    assert path.parents[1] == cargo_home / "git" / "checkouts"


@pytest.mark.cli
def test_open_without_lockfile(runner, tmp_path):
    result = runner.invoke(cli, ["open", "-C", str(tmp_path), "foo"])
    assert result.exit_code == 1
    assert "Not a Cargo project" in result.output


@pytest.mark.cli
def test_open_ambiguous(invoke):
    result = invoke("open", "rand", EDITOR="vi")
    assert result.exit_code == 1
    assert "rand@0.7.3" in result.output
    assert "rand@0.8.5" in result.output


@pytest.mark.cli
def test_open_unknown_package(invoke):
    result = invoke("open", "rnad", EDITOR="vi")
    assert result.exit_code == 1
    assert "Did you mean" in result.output
    assert "rand" in result.output


@pytest.mark.cli
def test_open_path_dependency(invoke):
    result = invoke("open", "demo", EDITOR="vi")
    assert result.exit_code == 1
    assert "path dependency" in result.output


@pytest.mark.cli
def test_open_missing_argument(invoke):
    result = invoke("open")
    assert result.exit_code == 2


@pytest.mark.cli
def test_open_without_editor(invoke):
    result = invoke("open", "foo", CARGO_EDITOR="", VISUAL="", EDITOR="")
    assert result.exit_code == 1
    assert "CARGO_EDITOR" in result.output


@pytest.mark.cli
@pytest.mark.parametrize("status", [0, 3])
def test_open_propagates_editor_exit_status(invoke, status):
    editor = f"{shlex.quote(sys.executable)} -c 'import sys; sys.exit({status})'"
    result = invoke("open", "serde", CARGO_EDITOR=editor, EDITOR="vi")
    assert result.exit_code == status


@pytest.mark.cli
@pytest.mark.e2e
@pytest.mark.skipif(
    os.name == "nt" or system_which("echo") is None, reason="needs a POSIX echo"
)
def test_open_with_echo_editor(runner, cargo_project, capfd):
    result = runner.invoke(
        cli,
        ["open", "-C", str(cargo_project), "rand@0.8.5"],
        env={
            "CARGO_HOME": "/home/u/.cache",
            "CARGO_EDITOR": "",
            "VISUAL": "",
            "EDITOR": "echo",
        },
    )
    assert result.exit_code == 0, result.output
    out, _ = capfd.readouterr()
    assert out.strip() == (
        "/home/u/.cache/registry/src/github.com-1ecc6299db9ec823/rand-0.8.5"
    )


@pytest.mark.cli
def test_module_invocation():
    output = subprocess.check_output(
        [sys.executable, "-m", "cargo_open", "--version"],
        stderr=subprocess.STDOUT,
        env=os.environ.copy(),
    )
    assert __version__ in output.decode()


@pytest.mark.cli
@pytest.mark.e2e
@pytest.mark.skipif(
    os.name == "nt" or system_which("echo") is None, reason="needs a POSIX echo"
)
def test_open_registry_package_with_echo_editor(runner, cargo_project, capfd):
    result = runner.invoke(
        cli,
        ["open", "-C", str(cargo_project), "foo"],
        env={
            "CARGO_HOME": "/home/u/.cache",
            "CARGO_EDITOR": "",
            "VISUAL": "",
            "EDITOR": "echo",
        },
    )
    assert result.exit_code == 0, result.output
    out, _ = capfd.readouterr()
    path = out.strip()
    assert path == "/home/u/.cache/registry/src/example.com-bd999b40ddde963e/foo-1.2.3"


@pytest.mark.cli
def test_verbose_enables_debug_logging(invoke):
    logger = logging.getLogger("cargo_open")
    try:
        result = invoke("open", "-v", "--print-path", "foo")
        assert result.exit_code == 0, result.output
        assert result.output.strip().endswith("foo-1.2.3")
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(logging.NOTSET)
