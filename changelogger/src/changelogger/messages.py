"""Default English message table keyed by message id."""

from __future__ import annotations

from typing import Dict, Mapping

DEFAULT_MESSAGES: Dict[str, str] = {
    "source-not-found": "Changelog not found or unreadable: {path}",
    "link-pattern-required": "Automatic link generation requires a link pattern configuration.",
    "no-changes": "The Unreleased section has no entries; nothing to release.",
    "malformed-document": "Changelog structure could not be parsed: {reason}",
    "duplicate-release": "A release section for version {version} already exists.",
    "release-not-found": "No release section for version {version}.",
    "target-exists": "{path} already exists; pass --force to overwrite it.",
    "manual-links": "Links for [Unreleased] and [{version}] were set to {placeholder} and must be completed manually.",
    "blank-created": "Created {path}",
    "entry-added": "Added {category} entry to {path}",
    "release-created": "Released {version} ({date}) to {path}",
    "converted": "Wrote {format} output to {path}",
}


def render_message(message_id: str, params: Mapping[str, object], table: Mapping[str, str] | None = None) -> str:
    """Format a message from ``table``, falling back to the default table and finally to the id."""
    template = None
    if table is not None:
        template = table.get(message_id)
    if template is None:
        template = DEFAULT_MESSAGES.get(message_id, message_id)
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        return template


__all__ = ["DEFAULT_MESSAGES", "render_message"]
