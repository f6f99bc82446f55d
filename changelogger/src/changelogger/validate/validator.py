"""Structural checks for Keep a Changelog documents."""

from __future__ import annotations

import re
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from changelogger.core.model import UNRELEASED_LABEL, ChangeCategory, ChangelogDocument, Section
from changelogger.errors import MalformedDocumentError
from changelogger.parse.builder import parse_text
from changelogger.utils.io import read_all

_CATEGORY_HEADING = re.compile(r"^### (?P<name>[^\n]*)$", re.MULTILINE)


class Severity(str, Enum):
    """Severity levels for validation issues."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ValidationIssue(BaseModel):
    """Single validation issue description."""

    code: str
    message: str
    path: str = Field(default="/")
    severity: Severity = Field(default=Severity.ERROR)


class ValidationReport(BaseModel):
    """Aggregate validation report with summary metadata."""

    ok: bool
    issues: List[ValidationIssue] = Field(default_factory=list)
    summary: Dict[str, Any] = Field(default_factory=dict)


def _add_issue(issues: List[ValidationIssue], code: str, message: str, path: str, severity: Severity) -> None:
    issues.append(ValidationIssue(code=code, message=message, path=path, severity=severity))


def _check_categories(section: Section, issues: List[ValidationIssue]) -> None:
    path = f"/{section.label}"
    for match in _CATEGORY_HEADING.finditer(section.render()):
        name = match.group("name").strip()
        if ChangeCategory.lookup(name) is None:
            _add_issue(
                issues,
                "CATEGORY_UNKNOWN",
                f"Heading '### {name}' is not a Keep a Changelog category and is kept as opaque text.",
                path,
                Severity.INFO,
            )
    for category, values in section.entries.items():
        if not values:
            _add_issue(
                issues,
                "CATEGORY_EMPTY",
                f"Category '{category.value}' has a heading but no entries.",
                f"{path}/{category.value}",
                Severity.WARNING,
            )


def _check_releases(document: ChangelogDocument, issues: List[ValidationIssue]) -> None:
    counts = Counter(release.version for release in document.releases)
    for version, count in counts.items():
        if count > 1:
            _add_issue(
                issues,
                "RELEASE_DUPLICATE",
                f"Version {version} has {count} release sections.",
                f"/{version}",
                Severity.ERROR,
            )

    previous_date = None
    for release in document.releases:
        path = f"/{release.version}"
        if release.date is None:
            _add_issue(
                issues,
                "RELEASE_DATE_MISSING",
                "Release heading has no valid YYYY-MM-DD date.",
                path,
                Severity.ERROR,
            )
        elif previous_date is not None and release.date > previous_date:
            _add_issue(
                issues,
                "RELEASE_ORDER",
                f"Release {release.version} is dated after the release listed above it.",
                path,
                Severity.WARNING,
            )
        if release.date is not None:
            previous_date = release.date
        if release.link is None:
            _add_issue(
                issues,
                "RELEASE_LINK_MISSING",
                f"No '[{release.version}]:' link definition in the footer.",
                path,
                Severity.WARNING,
            )
        _check_categories(release, issues)


def validate_document(document: ChangelogDocument) -> ValidationReport:
    """Validate a parsed document and return the structured report."""
    issues: List[ValidationIssue] = []
    if not document.unreleased.raw_text and not document.unreleased.is_mutated:
        _add_issue(
            issues,
            "UNRELEASED_HEADING_MISSING",
            "Document has no '## [Unreleased]' section.",
            f"/{UNRELEASED_LABEL}",
            Severity.WARNING,
        )
    if document.releases and document.unreleased.link is None:
        _add_issue(
            issues,
            "UNRELEASED_LINK_MISSING",
            "No '[Unreleased]:' link definition in the footer.",
            f"/{UNRELEASED_LABEL}",
            Severity.WARNING,
        )
    _check_categories(document.unreleased, issues)
    _check_releases(document, issues)

    summary = {
        "releases": len(document.releases),
        "last_version": document.last_version,
        "unreleased_entries": document.unreleased.entry_count,
        "links": len(document.footer.links),
    }
    ok = not any(issue.severity == Severity.ERROR for issue in issues)
    return ValidationReport(ok=ok, issues=issues, summary=summary)


def validate_changelog(path: Path) -> ValidationReport:
    """Read and validate a changelog file.

    Unreadable sources propagate as :class:`SourceNotFoundError`; structural
    parse failures are reported as a ``MALFORMED_DOCUMENT`` error issue.
    """
    text = read_all(path)
    try:
        document = parse_text(text)
    except MalformedDocumentError as exc:
        issue = ValidationIssue(code="MALFORMED_DOCUMENT", message=str(exc), severity=Severity.ERROR)
        return ValidationReport(ok=False, issues=[issue], summary={"target": str(path)})
    report = validate_document(document)
    report.summary["target"] = str(path)
    return report


__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "validate_changelog",
    "validate_document",
]
