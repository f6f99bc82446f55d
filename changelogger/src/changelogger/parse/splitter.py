"""Split changelog text into header, Unreleased, release blocks and footer."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from changelogger.core.model import UNRELEASED_LABEL
from changelogger.errors import MalformedDocumentError

LOG = logging.getLogger(__name__)

_SECTION_HEADING = re.compile(r"^## \[(?P<label>[^\]\n]+)\](?P<suffix>[^\n]*)$", re.MULTILINE)
_UNRELEASED_LINK = re.compile(rf"^\[{UNRELEASED_LABEL}\]:", re.MULTILINE | re.IGNORECASE)
_LINK_DEFINITION = re.compile(r"^\[[^\]\n]+\]:")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")


@dataclass(frozen=True)
class RawSection:
    """Heading-delimited span with its heading line restored."""

    label: str
    heading: str
    suffix: str
    text: str


@dataclass
class SplitDocument:
    """Raw decomposition of a changelog document."""

    header: str
    unreleased: Optional[RawSection]
    releases: List[RawSection] = field(default_factory=list)
    footer: str = ""


def trim_block(text: str) -> str:
    """Drop leading blank lines and trailing whitespace from a block."""
    return _LEADING_BLANK_LINES.sub("", text).rstrip()


def footer_start(text: str) -> int:
    """Return the offset where the link-reference footer begins, or ``len(text)``.

    The footer is anchored on the ``[Unreleased]:`` line and extends backwards
    over link definitions that directly precede it.
    """
    match = _UNRELEASED_LINK.search(text)
    if match is None:
        return len(text)
    start = match.start()
    while start > 0:
        previous = text.rfind("\n", 0, start - 1) + 1
        if not _LINK_DEFINITION.match(text[previous : start - 1]):
            break
        start = previous
    return start


def split_sections(text: str) -> SplitDocument:
    """Break LF-normalised changelog text into its raw parts."""
    boundary = footer_start(text)
    has_footer = boundary < len(text)
    body = text[:boundary]
    footer = trim_block(text[boundary:])

    headings = list(_SECTION_HEADING.finditer(body))
    if not headings:
        if not has_footer:
            raise MalformedDocumentError(reason="no section headings and no [Unreleased] link definition")
        LOG.debug("No section headings found; treating body as header.")
        return SplitDocument(header=trim_block(body), unreleased=None, releases=[], footer=footer)

    header = trim_block(body[: headings[0].start()])
    unreleased: Optional[RawSection] = None
    releases: List[RawSection] = []
    for index, match in enumerate(headings):
        end = headings[index + 1].start() if index + 1 < len(headings) else len(body)
        section = RawSection(
            label=match.group("label").strip(),
            heading=match.group(0).rstrip(),
            suffix=match.group("suffix"),
            text=trim_block(body[match.start() : end]),
        )
        if section.label.lower() == UNRELEASED_LABEL.lower():
            if unreleased is not None:
                raise MalformedDocumentError(reason="more than one Unreleased heading")
            if releases:
                raise MalformedDocumentError(reason="Unreleased heading follows a release heading")
            unreleased = section
        else:
            releases.append(section)

    LOG.debug(
        "Split changelog: unreleased=%s releases=%d footer=%s",
        unreleased is not None,
        len(releases),
        has_footer,
    )
    return SplitDocument(header=header, unreleased=unreleased, releases=releases, footer=footer)


__all__ = ["RawSection", "SplitDocument", "footer_start", "split_sections", "trim_block"]
