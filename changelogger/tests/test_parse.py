"""Tests for building ChangelogDocument models and the round-trip property."""

from __future__ import annotations

import datetime as dt
from typing import List, Tuple

from hypothesis import given, strategies as st

from changelogger.core.model import CATEGORY_ORDER, ChangeCategory
from changelogger.parse.builder import parse_release_date, parse_text
from changelogger.render.serializer import render

DOCUMENT = """# Changelog
All notable changes to this project will be documented in this file.

## [Unreleased]
### Added
- Dark mode toggle.

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


def test_parse_builds_full_model() -> None:
    document = parse_text(DOCUMENT)
    assert document.header.startswith("# Changelog")
    assert document.unreleased.entries == {ChangeCategory.ADDED: ["Dark mode toggle."]}
    assert document.unreleased.link == "https://example.com/compare/v1.1.0...HEAD"
    assert [release.version for release in document.releases] == ["1.1.0", "1.0.0"]
    assert document.releases[0].date == dt.date(2024, 2, 1)
    assert document.releases[1].link == "https://example.com/releases/tag/v1.0.0"
    assert document.last_version == "1.1.0"


def test_missing_unreleased_becomes_empty_section() -> None:
    document = parse_text("# Changelog\n\n## [1.0.0] - 2024-01-10\n### Added\n- x\n")
    assert document.unreleased.entries == {}
    assert document.unreleased.raw_text == ""
    assert document.unreleased.link is None
    assert document.footer.raw_text == ""


def test_release_without_footer_has_no_link() -> None:
    document = parse_text("## [Unreleased]\n\n## [0.1.0] - 2023-05-01\n### Fixed\n- y\n")
    assert document.releases[0].link is None


def test_releases_are_not_resorted() -> None:
    text = "## [Unreleased]\n\n## [1.0.0] - 2024-01-01\n- a\n\n## [2.0.0] - 2024-06-01\n- b\n"
    assert [release.version for release in parse_text(text).releases] == ["1.0.0", "2.0.0"]


def test_crlf_input_is_normalised() -> None:
    document = parse_text(DOCUMENT.replace("\n", "\r\n"))
    assert render(document) == DOCUMENT


def test_parse_release_date() -> None:
    assert parse_release_date(" - 2024-03-15") == dt.date(2024, 3, 15)
    assert parse_release_date(" - 2024-03-15 [YANKED]") == dt.date(2024, 3, 15)
    assert parse_release_date(" - 2024-13-40") is None
    assert parse_release_date("") is None


def test_round_trip_of_sample() -> None:
    assert render(parse_text(DOCUMENT)) == DOCUMENT


def test_round_trip_normalises_missing_trailing_newline() -> None:
    assert render(parse_text(DOCUMENT.rstrip("\n"))) == DOCUMENT


entry_text = st.from_regex(r"[A-Za-z0-9][A-Za-z0-9 ,.()]{0,30}[A-Za-z0-9.)]", fullmatch=True)
category_blocks = st.lists(
    st.tuples(st.sampled_from(CATEGORY_ORDER), st.lists(entry_text, max_size=3)),
    max_size=4,
    unique_by=lambda item: item[0],
)
SectionSpec = List[Tuple[ChangeCategory, List[str]]]


def _section(heading: str, blocks: SectionSpec) -> str:
    rendered = []
    for category, entries in blocks:
        rendered.append("\n".join([f"### {category.value}", *(f"- {entry}" for entry in entries)]))
    if rendered:
        return heading + "\n" + "\n\n".join(rendered)
    return heading


@st.composite
def documents(draw: st.DrawFn) -> str:
    """Generate well-formed changelogs separated by single blank lines."""
    version_text = st.from_regex(r"[0-9]{1,2}\.[0-9]{1,2}\.[0-9]{1,2}", fullmatch=True)
    versions = draw(st.lists(version_text, unique=True, max_size=4))
    blocks = ["# Changelog\nNotes about this project."]
    blocks.append(_section("## [Unreleased]", draw(category_blocks)))
    for index, version in enumerate(versions):
        heading = f"## [{version}] - 2024-01-{index + 1:02d}"
        blocks.append(_section(heading, draw(category_blocks)))
    links = ["[Unreleased]: https://example.com/compare/HEAD"]
    links.extend(f"[{version}]: https://example.com/tag/{version}" for version in versions)
    blocks.append("\n".join(links))
    return "\n\n".join(blocks) + "\n"


@given(documents())
def test_round_trip_property(text: str) -> None:
    """Parsing then rendering a well-formed changelog reproduces it."""
    assert render(parse_text(text)) == text


@given(st.permutations(CATEGORY_ORDER))
def test_rebuilt_sections_use_fixed_category_order(order: List[ChangeCategory]) -> None:
    text = _section("## [Unreleased]", [(category, [category.value.lower()]) for category in order])
    document = parse_text(text + "\n")
    rebuilt = document.unreleased.with_entries(document.unreleased.entries).render()
    positions = [rebuilt.index(f"### {category.value}") for category in CATEGORY_ORDER]
    assert positions == sorted(positions)


def test_absent_category_is_not_synthesised() -> None:
    document = parse_text(DOCUMENT)
    release = document.releases[0]
    assert release.entries_for(ChangeCategory.SECURITY) is None
    assert "### Security" not in release.with_entries(release.entries).render()
    assert "### Security" not in render(document)
