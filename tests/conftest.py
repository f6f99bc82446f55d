"""Test fixtures for changelogger integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE = """# Changelog
All notable changes to this project will be documented in this file.

## [Unreleased]
### Added
- Dark mode toggle.

### Fixed
- Crash on empty config.

## [1.1.0] - 2024-02-01
### Changed
- Faster startup.

## [1.0.0] - 2024-01-10
### Added
- Initial release.

[Unreleased]: https://example.com/compare/v1.1.0...HEAD
[1.1.0]: https://example.com/compare/v1.0.0...v1.1.0
[1.0.0]: https://example.com/releases/tag/v1.0.0
"""

EMPTY_UNRELEASED = """# Changelog

## [Unreleased]

## [1.0.0] - 2024-01-10
### Added
- Initial release.

[Unreleased]: https://example.com/compare/v1.0.0...HEAD
[1.0.0]: https://example.com/releases/tag/v1.0.0
"""


def _write(path: Path, text: str) -> Path:
    path.write_bytes(text.encode("utf-8"))
    return path


@pytest.fixture()
def sample_changelog(tmp_path: Path) -> Path:
    """A well-formed changelog with pending entries, two releases and a footer."""
    return _write(tmp_path / "CHANGELOG.md", SAMPLE)


@pytest.fixture()
def empty_unreleased_changelog(tmp_path: Path) -> Path:
    """A changelog whose Unreleased section has no entries."""
    return _write(tmp_path / "EMPTY.md", EMPTY_UNRELEASED)


@pytest.fixture()
def broken_changelog(tmp_path: Path) -> Path:
    """A changelog with an undated, out-of-order release and no release links."""
    text = (
        "# Changelog\n\n"
        "## [Unreleased]\n### Added\n\n"
        "## [1.0.0]\n### Fixed\n- Something.\n\n"
        "## [1.1.0] - 2024-02-01\n### Breaking\n- Oops.\n\n"
        "[Unreleased]: https://example.com/compare/v1.1.0...HEAD\n"
    )
    return _write(tmp_path / "BROKEN.md", text)
