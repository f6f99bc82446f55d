"""Promote the Unreleased section to a dated release."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from changelogger.config import LinkPattern
from changelogger.core.model import (
    ChangelogDocument,
    Footer,
    ReleaseSection,
    UNRELEASED_HEADING,
    UNRELEASED_LABEL,
    empty_unreleased,
)
from changelogger.errors import ConfigurationError, DuplicateReleaseError, NoChangesError

LOG = logging.getLogger(__name__)

PLACEHOLDER_URL = "ENTER-URL-HERE"


class LinkMode(str, Enum):
    """How footer links are produced for a new release."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"
    NONE = "none"


@dataclass(frozen=True)
class Notice:
    """Informational message for the caller, rendered through the message table."""

    message_id: str
    params: dict = field(default_factory=dict)


@dataclass
class Promotion:
    """Outcome of promoting Unreleased to a release."""

    document: ChangelogDocument
    release: ReleaseSection
    notices: List[Notice] = field(default_factory=list)


def check_preconditions(
    document: ChangelogDocument,
    version: str,
    link_mode: LinkMode,
    link_pattern: Optional[LinkPattern],
) -> None:
    """Raise before any mutation if the promotion cannot proceed."""
    if not version.strip():
        raise ValueError("Release version must not be empty.")
    if link_mode is LinkMode.AUTOMATIC:
        if link_pattern is None:
            raise ConfigurationError()
        template = link_pattern.first_release if document.last_version is None else link_pattern.normal_release
        if template is None:
            raise ConfigurationError()
    if not document.unreleased.has_changes:
        raise NoChangesError()
    if document.release(version) is not None:
        raise DuplicateReleaseError(version=version)


def _release_text(unreleased_text: str, heading: str) -> str:
    _, _, body = unreleased_text.partition("\n")
    return f"{heading}\n{body}" if body else heading


def _footer_links(
    version: str,
    previous: Optional[str],
    link_mode: LinkMode,
    link_pattern: Optional[LinkPattern],
) -> List[Tuple[str, str]]:
    if link_mode is LinkMode.AUTOMATIC:
        if link_pattern is None:
            raise ConfigurationError()
        return [
            (UNRELEASED_LABEL, link_pattern.unreleased_link(version)),
            (version, link_pattern.release_link(version, previous)),
        ]
    return [(UNRELEASED_LABEL, PLACEHOLDER_URL), (version, PLACEHOLDER_URL)]


def promote(
    document: ChangelogDocument,
    version: str,
    link_mode: LinkMode | str = LinkMode.NONE,
    link_pattern: Optional[LinkPattern] = None,
    *,
    release_date: dt.date,
) -> Promotion:
    """Move Unreleased content into a new release stamped with ``release_date``."""
    link_mode = LinkMode(link_mode)
    version = version.strip()
    check_preconditions(document, version, link_mode, link_pattern)

    previous = document.last_version
    heading = ReleaseSection.heading_for(version, release_date)
    notices: List[Notice] = []

    if link_mode is LinkMode.NONE:
        footer = Footer(raw_text=document.footer.raw_text.strip())
    else:
        footer = document.footer.rewrite(_footer_links(version, previous, link_mode, link_pattern))
        if link_mode is LinkMode.MANUAL:
            notices.append(Notice("manual-links", {"version": version, "placeholder": PLACEHOLDER_URL}))

    release = ReleaseSection(
        label=version,
        heading=heading,
        raw_text=_release_text(document.unreleased.render(), heading),
        entries=document.unreleased.entries,
        link=footer.link(version),
        version=version,
        date=release_date,
    )
    unreleased = empty_unreleased()
    unreleased.raw_text = UNRELEASED_HEADING
    unreleased.link = footer.link(UNRELEASED_LABEL)

    promoted = ChangelogDocument(
        header=document.header,
        unreleased=unreleased,
        releases=[release, *document.releases],
        footer=footer,
    )
    LOG.debug("Promoted Unreleased to %s (previous %s, links %s)", version, previous, link_mode.value)
    return Promotion(document=promoted, release=release, notices=notices)


__all__ = ["LinkMode", "Notice", "PLACEHOLDER_URL", "Promotion", "check_preconditions", "promote"]
