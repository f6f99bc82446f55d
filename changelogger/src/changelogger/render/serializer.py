"""Serialise a ChangelogDocument to Markdown or plain text."""

from __future__ import annotations

import re
from enum import Enum
from typing import List

from changelogger.core.model import UNRELEASED_LABEL, ChangelogDocument, Section

_HEADING_MARKER = re.compile(r"^#{1,3} ", re.MULTILINE)
_BRACKETED_LABEL = re.compile(r"\[([^\[\]\n]*)\]")
BLOCK_SEPARATOR = "\n\n"


class OutputFormat(str, Enum):
    """Output profiles: full or release-only, Markdown or plain text."""

    FULL = "full"
    RELEASE_ONLY = "release-only"
    TEXT = "text"
    TEXT_RELEASE_ONLY = "text-release-only"

    @property
    def release_only(self) -> bool:
        return self in (OutputFormat.RELEASE_ONLY, OutputFormat.TEXT_RELEASE_ONLY)

    @property
    def plain_text(self) -> bool:
        return self in (OutputFormat.TEXT, OutputFormat.TEXT_RELEASE_ONLY)


def strip_heading_markers(text: str) -> str:
    """Remove ``#``, ``##`` and ``###`` heading markers and their trailing space."""
    return _HEADING_MARKER.sub("", text)


def strip_label_brackets(text: str) -> str:
    """Turn ``[label]`` into ``label `` throughout ``text``."""
    return _BRACKETED_LABEL.sub(r"\1 ", text)


def render_section(section: Section, plain_text: bool = False) -> str:
    text = section.render()
    return strip_heading_markers(text) if plain_text else text


def render(
    document: ChangelogDocument,
    output_format: OutputFormat | str = OutputFormat.FULL,
    include_header: bool = True,
    newline: str = "\n",
) -> str:
    """Render ``document`` using the selected profile.

    Non-empty blocks are joined by a single blank line and the result ends
    with exactly one newline (or is empty when there is nothing to emit).
    """
    output_format = OutputFormat(output_format)
    plain = output_format.plain_text

    blocks: List[str] = []
    if include_header and document.header:
        header = document.header
        if plain:
            header = strip_label_brackets(strip_heading_markers(header))
        blocks.append(header)
    if not output_format.release_only:
        blocks.append(render_section(document.unreleased, plain))
    blocks.extend(render_section(release, plain) for release in document.releases)

    footer = document.footer.without(UNRELEASED_LABEL) if output_format.release_only else document.footer
    blocks.append(footer.raw_text)

    text = BLOCK_SEPARATOR.join(block for block in blocks if block)
    if not text:
        return ""
    text += "\n"
    if newline != "\n":
        text = text.replace("\n", newline)
    return text


__all__ = [
    "OutputFormat",
    "render",
    "render_section",
    "strip_heading_markers",
    "strip_label_brackets",
]
