"""Allow ``python -m guidebook``."""

from guidebook.cli import app

app(prog_name="guidebook")
