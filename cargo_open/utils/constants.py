FALSE_VALUES = ("0", "false", "no", "off")
TRUE_VALUES = ("1", "true", "yes", "on")

LOCKFILE_NAME = "Cargo.lock"
# Newest lockfile format Cargo writes.
MAX_LOCKFILE_VERSION = 4

# Highest priority first.
EDITOR_VARIABLES = ("CARGO_EDITOR", "VISUAL", "EDITOR")

DEFAULT_CARGO_HOME_NAME = ".cargo"

# Source kind discriminants, in the order Cargo declares them.
SOURCE_KIND_GIT = "git"
SOURCE_KIND_PATH = "path"
SOURCE_KIND_REGISTRY = "registry"
SOURCE_KIND_LOCAL_REGISTRY = "local-registry"
SOURCE_KIND_DIRECTORY = "directory"
SOURCE_KIND_SPARSE = "sparse"
SOURCE_KIND_DISCRIMINANTS = {
    SOURCE_KIND_GIT: 0,
    SOURCE_KIND_PATH: 1,
    SOURCE_KIND_REGISTRY: 2,
    SOURCE_KIND_SPARSE: 3,
    SOURCE_KIND_LOCAL_REGISTRY: 4,
    SOURCE_KIND_DIRECTORY: 5,
}

GIT_SHORT_ID_LENGTH = 7
