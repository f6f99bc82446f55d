"""Rendering of changelog models."""

from .serializer import OutputFormat, render, render_section
from .templates import blank_changelog

__all__ = ["OutputFormat", "blank_changelog", "render", "render_section"]
