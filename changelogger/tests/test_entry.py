"""Tests for adding entries to the Unreleased section."""

from __future__ import annotations

import pytest

from changelogger.core.model import ChangeCategory
from changelogger.edit.entry import insert
from changelogger.parse.builder import parse_text
from changelogger.render.serializer import render

DOCUMENT = """# Changelog

## [Unreleased]
### Added
- Dark mode toggle.
- Export to CSV.

### Fixed
- Crash on empty config.

## [1.0.0] - 2024-01-10
### Added
- Initial release.

[Unreleased]: https://example.com/compare/v1.0.0...HEAD
[1.0.0]: https://example.com/releases/tag/v1.0.0
"""


def test_new_entry_leads_existing_category() -> None:
    document = insert(parse_text(DOCUMENT), ChangeCategory.ADDED, "Plugin API.")
    assert document.unreleased.entries[ChangeCategory.ADDED] == [
        "Plugin API.",
        "Dark mode toggle.",
        "Export to CSV.",
    ]
    expected = DOCUMENT.replace("## [Unreleased]\n### Added\n", "## [Unreleased]\n### Added\n- Plugin API.\n")
    assert render(document) == expected


def test_new_category_is_placed_in_fixed_order() -> None:
    document = insert(parse_text(DOCUMENT), "security", "Patch CVE-2024-0001.")
    expected = DOCUMENT.replace(
        "- Crash on empty config.\n",
        "- Crash on empty config.\n\n### Security\n- Patch CVE-2024-0001.\n",
    )
    assert render(document) == expected

    document = insert(parse_text(DOCUMENT), ChangeCategory.DEPRECATED, "Old flag.")
    output = render(document)
    assert output.index("### Added") < output.index("### Deprecated") < output.index("### Fixed")


def test_releases_and_footer_are_untouched() -> None:
    original = parse_text(DOCUMENT)
    document = insert(original, ChangeCategory.FIXED, "Another fix.")
    assert document.releases[0].raw_text == original.releases[0].raw_text
    assert document.footer.raw_text == original.footer.raw_text
    assert original.unreleased.entries[ChangeCategory.FIXED] == ["Crash on empty config."]


def test_insert_into_document_without_unreleased_heading() -> None:
    document = insert(parse_text("# Changelog\n\n## [1.0.0] - 2024-01-10\n- x\n"), "Added", "First.")
    assert render(document) == "# Changelog\n\n## [Unreleased]\n### Added\n- First.\n\n## [1.0.0] - 2024-01-10\n- x\n"


@pytest.mark.parametrize("category, data", [("Added", "   "), ("Breaking", "Something")])
def test_invalid_entries_are_rejected(category: str, data: str) -> None:
    with pytest.raises(ValueError):
        insert(parse_text(DOCUMENT), category, data)


def test_multi_line_entry_survives_reparse() -> None:
    document = insert(parse_text(DOCUMENT), ChangeCategory.ADDED, "First line\nsecond line\n\n  third line")
    output = render(document)
    assert "### Added\n- First line\n  second line\n  third line\n- Dark mode toggle." in output

    reparsed = parse_text(output)
    assert reparsed.unreleased.entries[ChangeCategory.ADDED][0] == "First line\n  second line\n  third line"
    assert reparsed.unreleased.entries == document.unreleased.entries
    assert render(reparsed) == output


def test_crlf_entry_text_is_normalised() -> None:
    document = insert(parse_text(DOCUMENT), "Fixed", "Line one\r\nline two\r\n")
    assert document.unreleased.entries[ChangeCategory.FIXED][0] == "Line one\n  line two"
