from .command import cli  # noqa
