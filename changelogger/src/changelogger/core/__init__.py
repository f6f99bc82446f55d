"""Core abstractions for changelogger."""

from .model import (
    CATEGORY_ORDER,
    ChangeCategory,
    ChangelogDocument,
    Footer,
    ReleaseSection,
    Section,
    UNRELEASED_HEADING,
    UNRELEASED_LABEL,
)

__all__ = [
    "CATEGORY_ORDER",
    "ChangeCategory",
    "ChangelogDocument",
    "Footer",
    "ReleaseSection",
    "Section",
    "UNRELEASED_HEADING",
    "UNRELEASED_LABEL",
]
