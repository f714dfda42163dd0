import itertools
from pathlib import Path

import pytest

from cargo_open import environments


@pytest.mark.environments
@pytest.mark.parametrize(
    "arg, prefix, use_negation",
    list(itertools.product(("ENABLE_SOMETHING",), ("FAKEPREFIX", None), (True, False))),
)
def test_get_from_env(arg, prefix, use_negation):
    positive_var = arg
    negative_var = f"NO_{arg}"
    if prefix:
        positive_var = f"{prefix}_{positive_var}"
        negative_var = f"{prefix}_{negative_var}"

    environ = {positive_var: "true"}
    assert (
        environments.get_from_env(
            arg, prefix=prefix, check_for_negation=use_negation, environ=environ
        )
        is True
    )

    # Only the negated variable is set.
    environ = {negative_var: "true"}
    expected = False if use_negation else None
    assert (
        environments.get_from_env(
            arg, prefix=prefix, check_for_negation=use_negation, environ=environ
        )
        is expected
    )


@pytest.mark.environments
def test_get_from_env_returns_non_boolean_values():
    environ = {"CARGO_OPEN_VERBOSITY": "2"}
    assert environments.get_from_env("VERBOSITY", environ=environ) == "2"
    assert environments.get_from_env("MISSING", environ=environ, default="x") == "x"


@pytest.mark.environments
def test_get_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CARGO_OPEN_SOMETHING", "yes")
    assert environments.get_from_env("SOMETHING") is True


@pytest.mark.environments
def test_setting_reads_given_environ():
    s = environments.Setting(
        {"CARGO_EDITOR": "nvim", "VISUAL": "code --wait", "EDITOR": "vi"}
    )
    assert s.editor_variables() == [
        ("CARGO_EDITOR", "nvim"),
        ("VISUAL", "code --wait"),
        ("EDITOR", "vi"),
    ]


@pytest.mark.environments
@pytest.mark.parametrize("value", ["", "   ", "\t"])
def test_setting_blank_values_are_unset(value):
    s = environments.Setting({"CARGO_EDITOR": value, "CARGO_HOME": value})
    assert s.CARGO_EDITOR is None
    assert s.CARGO_HOME is None


@pytest.mark.environments
def test_cargo_home_from_environment(tmp_path):
    s = environments.Setting({"CARGO_HOME": str(tmp_path)})
    assert s.cargo_home == tmp_path


@pytest.mark.environments
def test_cargo_home_defaults_to_home_directory():
    s = environments.Setting({"HOME": "/home/u"})
    assert s.cargo_home == Path("/home/u") / ".cargo"


@pytest.mark.environments
def test_cargo_home_falls_back_to_user_home(monkeypatch, tmp_path):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    s = environments.Setting({"CARGO_HOME": ""})
    assert s.cargo_home == tmp_path / ".cargo"


@pytest.mark.environments
@pytest.mark.parametrize(
    "environ, verbose",
    [
        ({}, False),
        ({"CARGO_OPEN_VERBOSE": "1"}, True),
        ({"CARGO_OPEN_VERBOSE": "off"}, False),
        ({"CARGO_OPEN_NO_VERBOSE": "1"}, False),
        ({"CARGO_OPEN_VERBOSITY": "2"}, True),
        ({"CARGO_OPEN_VERBOSITY": "0"}, False),
    ],
)
def test_setting_verbosity(environ, verbose):
    assert environments.Setting(environ).is_verbose() is verbose

