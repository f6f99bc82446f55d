"""Template for a blank Keep a Changelog document."""

from __future__ import annotations

from changelogger.core.model import UNRELEASED_HEADING

KEEP_A_CHANGELOG_URL = "https://keepachangelog.com/en/1.0.0/"
SEMVER_URL = "https://semver.org/spec/v2.0.0.html"


def blank_changelog(include_semver_statement: bool = True) -> str:
    """Return the standard header followed by an empty Unreleased section."""
    lines = [
        "# Changelog",
        "All notable changes to this project will be documented in this file.",
        "",
    ]
    if include_semver_statement:
        lines.append(f"The format is based on [Keep a Changelog]({KEEP_A_CHANGELOG_URL}),")
        lines.append(f"and this project adheres to [Semantic Versioning]({SEMVER_URL}).")
    else:
        lines.append(f"The format is based on [Keep a Changelog]({KEEP_A_CHANGELOG_URL}).")
    lines.extend(["", UNRELEASED_HEADING, ""])
    return "\n".join(lines)


__all__ = ["blank_changelog"]
