"""Utility helpers for changelogger."""

from .io import (
    load_yaml,
    read_all,
    source_exists,
    temporary_output_path,
    write_all,
)

__all__ = [
    "load_yaml",
    "read_all",
    "source_exists",
    "temporary_output_path",
    "write_all",
]
