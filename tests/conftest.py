from pathlib import Path

import pytest

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"
CRATES_IO_SPARSE = "sparse+https://index.crates.io/"
EXAMPLE_REGISTRY = "registry+https://example.com/registry"
GIT_SOURCE = (
    "git+https://github.com/Example/GitDep.git?branch=main"
    "#0123456789abcdef0123456789abcdef01234567"
)

SAMPLE_LOCKFILE = f"""\
# This file is automatically @generated by Cargo.
# It is not intended for manual editing.
version = 3

[[package]]
name = "demo"
version = "0.1.0"
dependencies = [
 "foo",
 "gitdep",
 "rand 0.7.3",
 "rand 0.8.5",
 "serde",
]

[[package]]
name = "foo"
version = "1.2.3"
source = "{EXAMPLE_REGISTRY}"
checksum = "8e1c9b1bd2ba3c4fd1a5c3d4f6c0f4a1e5a1f5b9e6e1a6f5c0c9b0f8a6c1e2d3"

[[package]]
name = "gitdep"
version = "0.3.0"
source = "{GIT_SOURCE}"

[[package]]
name = "rand"
version = "0.7.3"
source = "{CRATES_IO}"

[[package]]
name = "rand"
version = "0.8.5"
source = "{CRATES_IO}"

[[package]]
name = "serde"
version = "1.0.200"
source = "{CRATES_IO_SPARSE}"
"""


@pytest.fixture
def write_lockfile(tmp_path):
    def _write(content=SAMPLE_LOCKFILE, directory=None):
        directory = Path(directory) if directory else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "Cargo.lock"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cargo_project(write_lockfile):
    """A directory holding the sample Cargo.lock."""
    return write_lockfile().parent


@pytest.fixture
def cargo_home(tmp_path):
    return tmp_path / "cargo-home"


@pytest.fixture
def project(cargo_project, cargo_home):
    from cargo_open.project import Project

    return Project(cargo_project, environ={"CARGO_HOME": str(cargo_home)})
