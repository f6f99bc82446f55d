"""Extract per-category list entries from a section's text."""

from __future__ import annotations

import re
from typing import Dict, List

from changelogger.core.model import CategoryEntries, ChangeCategory, ordered_entries

_SUBHEADING = re.compile(r"^#{2,3} (?P<name>[^\n]*)$", re.MULTILINE)
_ITEM_MARKER = "- "


def _list_items(block: str) -> List[str]:
    items: List[str] = []
    continuing = False
    for line in block.split("\n"):
        if line.startswith(_ITEM_MARKER):
            items.append(line[len(_ITEM_MARKER) :].rstrip())
            continuing = True
        elif continuing and line[:1] in (" ", "\t") and line.strip():
            # Indented lines belong to the preceding item.
            items[-1] = f"{items[-1]}\n{line.rstrip()}"
        elif line.strip():
            continuing = False
    return items


def extract_categories(text: str) -> CategoryEntries:
    """Return entries per category whose ``### <Category>`` heading occurs in ``text``.

    A category without a heading is absent from the result; a heading with no
    list items maps to an empty list.
    """
    found: Dict[ChangeCategory, List[str]] = {}
    headings = list(_SUBHEADING.finditer(text))
    for index, match in enumerate(headings):
        if not match.group(0).startswith("### "):
            continue
        category = ChangeCategory.lookup(match.group("name"))
        if category is None:
            continue
        end = headings[index + 1].start() if index + 1 < len(headings) else len(text)
        found.setdefault(category, []).extend(_list_items(text[match.end() : end]))
    return ordered_entries(found)


__all__ = ["extract_categories"]
