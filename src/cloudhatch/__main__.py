"""Allow ``python -m cloudhatch``."""

from cloudhatch.cli import app


app()
