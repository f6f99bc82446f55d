"""I/O helpers."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import yaml

from changelogger.errors import SourceNotFoundError


def load_yaml(path: Path) -> dict:
    """Load a YAML file into a dictionary."""
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def source_exists(path: Path) -> bool:
    """Return True if ``path`` is an existing regular file."""
    return Path(path).is_file()


def read_all(path: Path) -> str:
    """Read a changelog as text, keeping its line endings untouched."""
    path = Path(path)
    if not source_exists(path):
        raise SourceNotFoundError(path=str(path))
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceNotFoundError(path=str(path)) from exc


@contextmanager
def temporary_output_path(target: Path) -> Iterator[Path]:
    """Yield a sibling temporary path that replaces ``target`` on success."""
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    os.close(fd)
    temp_path = Path(name)
    try:
        yield temp_path
        os.replace(temp_path, target)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_all(path: Path, text: str) -> Path:
    """Write ``text`` verbatim (no newline appended or translated) and return the path."""
    path = Path(path)
    with temporary_output_path(path) as temp_path:
        with temp_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    return path


__all__ = [
    "load_yaml",
    "read_all",
    "source_exists",
    "temporary_output_path",
    "write_all",
]
