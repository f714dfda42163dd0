import os
import sys

import cargo_open
from cargo_open.utils.constants import EDITOR_VARIABLES
from cargo_open.utils.shell import system_which


def get_cargo_open_diagnostics(project):
    print("<details><summary>$ cargo-open --support</summary>")
    print("")
    print(f"cargo-open version: `{cargo_open.__version__!r}`")
    print("")
    print(f"cargo-open location: `{os.path.dirname(cargo_open.__file__)!r}`")
    print("")
    print(f"Python location: `{sys.executable!r}`")
    print("")
    print(f"OS Name: `{os.name!r}`")
    print("")
    print(f"Cargo location: `{system_which('cargo')!r}`")
    print("")
    print(f"Cargo home: `{str(project.cargo_home)!r}`")
    print("")
    print("Editor environment variables:")
    print("")
    for key in EDITOR_VARIABLES:
        value = project.s.environ.get(key)
        if value is not None:
            print(f"  - `{key}`: `{value}`")
    print("")
    print("cargo-open specific environment variables:")
    print("")
    for key in project.s.environ:
        if key.startswith("CARGO_OPEN") or key == "CARGO_HOME":
            print(f"  - `{key}`: `{project.s.environ[key]}`")
    print("")
    print("---------------------------")
    print("")
    print(f"Project directory: `{project.project_directory!r}`")
    print("")
    if project.lockfile_exists:
        print(f"Lockfile: `{project.lockfile_location!r}`")
    else:
        print("Lockfile: not found")
    print("</details>")
