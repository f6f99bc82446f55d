"""Extract a changelog section for GitHub releases."""

from __future__ import annotations

import sys
from pathlib import Path

from changelogger import api
from changelogger.errors import ReleaseNotFoundError


def extract_section(changelog: Path, version: str) -> str:
    """Return the heading and body of ``version``, falling back to the newest release."""
    version = version.lstrip("v")
    try:
        return api.release_notes(changelog, version, include_heading=True) + "\n"
    except ReleaseNotFoundError:
        document = api.parse(changelog)
        if document.last_version is None:
            return document.unreleased.render() + "\n"
        return api.release_notes(changelog, document.last_version, include_heading=True) + "\n"


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: extract_changelog.py <version> [changelog]", file=sys.stderr)
        sys.exit(1)
    version = sys.argv[1]
    changelog = Path(sys.argv[2]) if len(sys.argv) > 2 else Path(__file__).resolve().parent.parent / "CHANGELOG.md"
    print(extract_section(changelog, version))


if __name__ == "__main__":
    main()
