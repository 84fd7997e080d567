# roadmap_engine/__main__.py
"""Entry point for ``python -m roadmap_engine``."""

from roadmap_engine.cli import app

app()
