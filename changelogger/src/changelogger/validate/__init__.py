"""Validation tooling for changelog documents."""

from .validator import (
    Severity,
    ValidationIssue,
    ValidationReport,
    validate_changelog,
    validate_document,
)

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "validate_changelog",
    "validate_document",
]
