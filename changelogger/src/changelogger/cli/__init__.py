"""Command line interface for changelogger."""

from .main import app

__all__ = ["app"]
