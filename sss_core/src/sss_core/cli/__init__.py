"""Command line interface package."""
from .main import app, main, run

__all__ = ["app", "main", "run"]
