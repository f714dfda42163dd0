import logging

from rich.console import Console

logging.basicConfig(level=logging.INFO)
console = Console(highlight=False)
err = Console(stderr=True, highlight=False)
