"""High-level Python API for changelog maintenance."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from changelogger.config import ChangelogConfig, LinkPattern
from changelogger.core.model import ChangeCategory, ChangelogDocument
from changelogger.edit.entry import insert
from changelogger.edit.release import LinkMode, promote
from changelogger.errors import ReleaseNotFoundError
from changelogger.parse.builder import parse_text
from changelogger.render.serializer import OutputFormat, render, strip_heading_markers
from changelogger.render.templates import blank_changelog
from changelogger.utils.io import read_all, source_exists, write_all
from changelogger.validate import ValidationReport, validate_changelog

LOG = logging.getLogger(__name__)

TodayProvider = Callable[[], dt.date]


@dataclass(frozen=True)
class EditResult:
    """Outcome of adding an entry."""

    output_path: Path
    category: ChangeCategory
    entry: str


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of promoting Unreleased to a release."""

    output_path: Path
    version: str
    date: dt.date
    link_mode: LinkMode
    previous_version: Optional[str]
    notices: List[str] = field(default_factory=list)


def _config(config: Optional[ChangelogConfig]) -> ChangelogConfig:
    return config if config is not None else ChangelogConfig()


def _write(document: ChangelogDocument, output_path: Path | str, config: ChangelogConfig, **options) -> Path:
    text = render(document, newline=config.newline, **options)
    return write_all(Path(output_path), text)


def parse(path: Path | str) -> ChangelogDocument:
    """Parse the changelog at ``path`` into a fresh model."""
    return parse_text(read_all(Path(path)))


def insert_entry(
    path: Path | str,
    output_path: Path | str,
    category: ChangeCategory | str,
    data: str,
    *,
    config: Optional[ChangelogConfig] = None,
) -> EditResult:
    """Add ``data`` as the first entry of ``category`` in the Unreleased section."""
    config = _config(config)
    category = ChangeCategory.coerce(category)
    document = insert(parse(path), category, data)
    target = _write(document, output_path, config)
    LOG.info("Added %s entry to %s", category.value, target)
    entry = document.unreleased.entries[category][0]
    return EditResult(output_path=target, category=category, entry=entry)


def create_blank(
    path: Path | str,
    include_semver_statement: bool = True,
    *,
    config: Optional[ChangelogConfig] = None,
    force: bool = False,
) -> Path:
    """Write an empty Keep a Changelog document to ``path``."""
    config = _config(config)
    path = Path(path)
    if source_exists(path) and not force:
        raise FileExistsError(config.message("target-exists", path=str(path)))
    text = blank_changelog(include_semver_statement)
    if config.newline != "\n":
        text = text.replace("\n", config.newline)
    return write_all(path, text)


def promote_release(
    path: Path | str,
    output_path: Path | str,
    version: str,
    link_mode: LinkMode | str = LinkMode.NONE,
    link_pattern: Optional[LinkPattern] = None,
    *,
    config: Optional[ChangelogConfig] = None,
    today: TodayProvider = dt.date.today,
) -> ReleaseResult:
    """Turn the Unreleased section into release ``version`` dated today.

    ``link_pattern`` falls back to the ``links`` entry of ``config``. Every
    precondition is checked before the output is written.
    """
    config = _config(config)
    link_mode = LinkMode(link_mode)
    pattern = link_pattern if link_pattern is not None else config.links
    document = parse(path)
    previous = document.last_version
    promotion = promote(document, version, link_mode, pattern, release_date=today())
    notices = [config.message(notice.message_id, **notice.params) for notice in promotion.notices]
    for notice in notices:
        LOG.info(notice)
    target = _write(promotion.document, output_path, config)
    return ReleaseResult(
        output_path=target,
        version=promotion.release.version,
        date=promotion.release.date,
        link_mode=link_mode,
        previous_version=previous,
        notices=notices,
    )


def convert(
    path: Path | str,
    output_path: Path | str,
    output_format: OutputFormat | str = OutputFormat.FULL,
    include_header: bool = True,
    *,
    config: Optional[ChangelogConfig] = None,
) -> Path:
    """Re-serialise the changelog at ``path`` in ``output_format``."""
    config = _config(config)
    output_format = OutputFormat(output_format)
    document = parse(path)
    return _write(document, output_path, config, output_format=output_format, include_header=include_header)


def release_notes(
    path: Path | str,
    version: str,
    *,
    plain_text: bool = False,
    include_heading: bool = False,
) -> str:
    """Return the body of one release section, e.g. for a published release description."""
    document = parse(path)
    release = document.release(version.strip())
    if release is None:
        raise ReleaseNotFoundError(version=version)
    text = release.render()
    if not include_heading:
        _, _, text = text.partition("\n")
        text = text.strip("\n")
    return strip_heading_markers(text) if plain_text else text


def validate(path: Path | str) -> ValidationReport:
    """Validate the changelog structure and return the structured report."""
    return validate_changelog(Path(path))


__all__ = [
    "EditResult",
    "ReleaseResult",
    "TodayProvider",
    "convert",
    "create_blank",
    "insert_entry",
    "parse",
    "promote_release",
    "release_notes",
    "validate",
]
