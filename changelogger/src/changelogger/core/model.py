"""Structured changelog model for Keep a Changelog documents."""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

UNRELEASED_LABEL = "Unreleased"
UNRELEASED_HEADING = f"## [{UNRELEASED_LABEL}]"

_LINK_LINE = re.compile(r"^\[(?P<label>[^\]]+)\]:[ \t]*(?P<url>[^\n]*)$", re.MULTILINE)


class ChangeCategory(str, Enum):
    """The six change types, declared in serialization order."""

    ADDED = "Added"
    CHANGED = "Changed"
    DEPRECATED = "Deprecated"
    REMOVED = "Removed"
    FIXED = "Fixed"
    SECURITY = "Security"

    @classmethod
    def coerce(cls, value: "ChangeCategory | str") -> "ChangeCategory":
        """Return ``value`` as a category, raising ValueError for unknown names."""
        if isinstance(value, cls):
            return value
        category = cls.lookup(value)
        if category is None:
            raise ValueError(f"Unknown change category: {value!r}")
        return category

    @classmethod
    def lookup(cls, name: str) -> Optional["ChangeCategory"]:
        """Return the category matching ``name`` case-insensitively, if any."""
        key = name.strip().lower()
        for category in cls:
            if category.value.lower() == key:
                return category
        return None


CATEGORY_ORDER: Tuple[ChangeCategory, ...] = tuple(ChangeCategory)

CategoryEntries = Dict[ChangeCategory, List[str]]


def ordered_entries(entries: CategoryEntries) -> CategoryEntries:
    """Return ``entries`` re-keyed in the fixed category order."""
    return {category: list(entries[category]) for category in CATEGORY_ORDER if category in entries}


def entry_text(value: str) -> str:
    """Return ``value`` as list-item text, continuation lines indented under the item.

    Blank lines are dropped.
    """
    lines = [line.rstrip() for line in value.strip().split("\n") if line.strip()]
    if not lines:
        return ""
    continuation = [line if line[:1] in (" ", "\t") else f"  {line}" for line in lines[1:]]
    return "\n".join([lines[0], *continuation])


def render_entries(heading: str, entries: CategoryEntries) -> str:
    """Build a section body from its heading and structured entries."""
    blocks = [heading]
    for category, values in ordered_entries(entries).items():
        lines = [f"### {category.value}"]
        lines.extend(f"- {entry_text(value)}" for value in values)
        blocks.append("\n".join(lines))
    if len(blocks) == 1:
        return heading
    return heading + "\n" + "\n\n".join(blocks[1:])


class Section(BaseModel):
    """A heading-delimited changelog block.

    ``raw_text`` holds the verbatim source span while the section is untouched.
    Mutations go through :meth:`with_entries`, which drops the raw text so the
    section is rebuilt from ``heading`` and ``entries`` on output.
    """

    label: str
    heading: str
    raw_text: Optional[str] = Field(default=None, description="Verbatim trimmed span, None once mutated.")
    entries: CategoryEntries = Field(default_factory=dict, description="Entries per category present in the source.")
    link: Optional[str] = Field(default=None, description="Footer URL for this section's label.")

    @field_validator("entries")
    @classmethod
    def _order_entries(cls, value: CategoryEntries) -> CategoryEntries:
        return ordered_entries(value)

    @property
    def is_mutated(self) -> bool:
        return self.raw_text is None

    @property
    def entry_count(self) -> int:
        return sum(len(values) for values in self.entries.values())

    @property
    def has_changes(self) -> bool:
        return self.entry_count > 0

    def entries_for(self, category: ChangeCategory) -> Optional[List[str]]:
        """Return the entries of ``category``, or None when its heading is absent."""
        return self.entries.get(category)

    def render(self) -> str:
        if self.raw_text is not None:
            return self.raw_text
        return render_entries(self.heading, self.entries)

    def with_entries(self, entries: CategoryEntries) -> "Section":
        """Return a copy carrying ``entries`` that re-renders from structure."""
        return self.model_copy(update={"entries": ordered_entries(entries), "raw_text": None})


class ReleaseSection(Section):
    """A versioned, dated release block."""

    version: str
    date: Optional[dt.date] = Field(default=None, description="Release date, None if the heading has none.")

    @staticmethod
    def heading_for(version: str, date: dt.date) -> str:
        return f"## [{version}] - {date.isoformat()}"


def empty_unreleased() -> Section:
    """Return the Unreleased section used when the source has none."""
    return Section(label=UNRELEASED_LABEL, heading=UNRELEASED_HEADING, raw_text="")


class Footer(BaseModel):
    """Trailing link-reference definitions kept as one block."""

    raw_text: str = ""

    @property
    def lines(self) -> List[str]:
        return [line for line in self.raw_text.split("\n") if line.strip()]

    @property
    def links(self) -> Dict[str, str]:
        """Return label to URL mappings in footer order; the first definition wins."""
        found: Dict[str, str] = {}
        for match in _LINK_LINE.finditer(self.raw_text):
            found.setdefault(match.group("label"), match.group("url").rstrip())
        return found

    def link(self, label: str) -> Optional[str]:
        """Return the URL defined for ``label``, matching labels case-insensitively."""
        key = label.lower()
        return next((url for found, url in self.links.items() if found.lower() == key), None)

    def without(self, label: str) -> "Footer":
        """Return a footer with every definition of ``label`` removed."""
        key = label.lower()
        kept = [line for line in self.lines if _line_label(line) != key]
        return Footer(raw_text="\n".join(kept))

    def rewrite(self, leading: Iterable[Tuple[str, str]]) -> "Footer":
        """Place ``leading`` definitions first, followed by untouched prior lines."""
        leading = list(leading)
        replaced = {label.lower() for label, _ in leading}
        lines = [f"[{label}]: {url}" for label, url in leading]
        lines.extend(line for line in self.lines if _line_label(line) not in replaced)
        return Footer(raw_text="\n".join(lines))


def _line_label(line: str) -> Optional[str]:
    match = _LINK_LINE.match(line)
    return match.group("label").lower() if match else None


class ChangelogDocument(BaseModel):
    """Root model produced by parsing and consumed by serialization."""

    header: str = ""
    unreleased: Section = Field(default_factory=empty_unreleased)
    releases: List[ReleaseSection] = Field(default_factory=list)
    footer: Footer = Field(default_factory=Footer)

    @property
    def last_version(self) -> Optional[str]:
        return self.releases[0].version if self.releases else None

    def release(self, version: str) -> Optional[ReleaseSection]:
        return next((release for release in self.releases if release.version == version), None)


__all__ = [
    "CATEGORY_ORDER",
    "CategoryEntries",
    "ChangeCategory",
    "ChangelogDocument",
    "Footer",
    "ReleaseSection",
    "Section",
    "UNRELEASED_HEADING",
    "UNRELEASED_LABEL",
    "empty_unreleased",
    "entry_text",
    "ordered_entries",
    "render_entries",
]
