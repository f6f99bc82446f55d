"""Mutations applied to parsed changelogs."""

from .entry import insert
from .release import LinkMode, Notice, PLACEHOLDER_URL, Promotion, promote

__all__ = ["LinkMode", "Notice", "PLACEHOLDER_URL", "Promotion", "insert", "promote"]
