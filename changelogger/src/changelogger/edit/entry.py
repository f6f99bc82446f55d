"""Add a single entry to the Unreleased section."""

from __future__ import annotations

import logging

from changelogger.core.model import ChangeCategory, ChangelogDocument, entry_text

LOG = logging.getLogger(__name__)


def insert(document: ChangelogDocument, category: ChangeCategory | str, data: str) -> ChangelogDocument:
    """Return a document whose Unreleased section lists ``data`` first under ``category``.

    Continuation lines of a multi-line ``data`` are indented under the item.
    Existing entries keep their order after the new one; releases and the
    footer are carried over untouched.
    """
    category = ChangeCategory.coerce(category)
    text = entry_text(data)
    if not text:
        raise ValueError("Entry text must not be empty.")

    entries = {key: list(values) for key, values in document.unreleased.entries.items()}
    entries[category] = [text, *entries.get(category, [])]
    unreleased = document.unreleased.with_entries(entries)
    LOG.debug("Inserted %s entry; category now has %d item(s)", category.value, len(entries[category]))
    return document.model_copy(update={"unreleased": unreleased})


__all__ = ["insert"]
