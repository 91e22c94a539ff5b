"""Allow running rmapp with ``python -m rmapp``."""

from rmapp.cli.main import app

app()
