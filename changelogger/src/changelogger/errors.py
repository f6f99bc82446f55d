"""Structured error kinds raised by changelog operations."""

from __future__ import annotations

from typing import Any, Dict

from changelogger.messages import render_message


class ChangelogError(RuntimeError):
    """Base error carrying a message id and its format parameters."""

    message_id = "changelog-error"

    def __init__(self, **params: Any) -> None:
        self.params: Dict[str, Any] = params
        super().__init__(render_message(self.message_id, params))


class SourceNotFoundError(ChangelogError, FileNotFoundError):
    """Raised when the input changelog is missing or unreadable."""

    message_id = "source-not-found"


class ConfigurationError(ChangelogError, ValueError):
    """Raised when a link mode is requested without the configuration it needs."""

    message_id = "link-pattern-required"


class NoChangesError(ChangelogError):
    """Raised when promoting an Unreleased section that has no entries."""

    message_id = "no-changes"


class MalformedDocumentError(ChangelogError, ValueError):
    """Raised when headings do not locate the Unreleased/footer boundaries."""

    message_id = "malformed-document"


class DuplicateReleaseError(ChangelogError, ValueError):
    """Raised when promoting to a version that already has a release section."""

    message_id = "duplicate-release"


class ReleaseNotFoundError(ChangelogError, LookupError):
    """Raised when a requested version has no release section."""

    message_id = "release-not-found"


__all__ = [
    "ChangelogError",
    "ConfigurationError",
    "DuplicateReleaseError",
    "MalformedDocumentError",
    "NoChangesError",
    "ReleaseNotFoundError",
    "SourceNotFoundError",
]
