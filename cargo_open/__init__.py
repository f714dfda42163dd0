import warnings

from cargo_open.__version__ import __version__  # noqa
from cargo_open.cli import cli  # noqa

warnings.filterwarnings("ignore", category=ResourceWarning)
