"""Compose the splitter and category extractor into a ChangelogDocument."""

from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Optional

from changelogger.core.model import (
    ChangelogDocument,
    Footer,
    ReleaseSection,
    Section,
    UNRELEASED_LABEL,
    empty_unreleased,
)
from changelogger.parse.categories import extract_categories
from changelogger.parse.splitter import RawSection, split_sections

LOG = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"\b(?P<date>\d{4}-\d{2}-\d{2})\b")


def normalise_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_release_date(suffix: str) -> Optional[dt.date]:
    """Return the first ISO date in a heading suffix such as `` - 2024-03-15``."""
    match = _ISO_DATE.search(suffix)
    if match is None:
        return None
    try:
        return dt.date.fromisoformat(match.group("date"))
    except ValueError:
        return None


def _release(raw: RawSection, footer: Footer) -> ReleaseSection:
    return ReleaseSection(
        label=raw.label,
        heading=raw.heading,
        raw_text=raw.text,
        entries=extract_categories(raw.text),
        link=footer.link(raw.label),
        version=raw.label,
        date=parse_release_date(raw.suffix),
    )


def parse_text(text: str) -> ChangelogDocument:
    """Parse changelog text into a fresh ChangelogDocument."""
    split = split_sections(normalise_newlines(text))
    footer = Footer(raw_text=split.footer)

    if split.unreleased is None:
        unreleased = empty_unreleased()
    else:
        unreleased = Section(
            label=UNRELEASED_LABEL,
            heading=split.unreleased.heading,
            raw_text=split.unreleased.text,
            entries=extract_categories(split.unreleased.text),
        )
    unreleased.link = footer.link(UNRELEASED_LABEL)

    document = ChangelogDocument(
        header=split.header,
        unreleased=unreleased,
        releases=[_release(raw, footer) for raw in split.releases],
        footer=footer,
    )
    LOG.debug(
        "Parsed changelog with %d release(s); last version %s",
        len(document.releases),
        document.last_version,
    )
    return document


__all__ = ["normalise_newlines", "parse_release_date", "parse_text"]
