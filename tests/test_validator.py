"""Tests for the changelogger validator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from changelogger.cli import app
from changelogger.validate import Severity, validate_changelog

runner = CliRunner()


def _run_validate(changelog: Path, json_path: Path) -> tuple[int, dict]:
    args = ["validate", "--file", str(changelog), "--json", str(json_path)]
    result = runner.invoke(app, args)
    assert json_path.exists(), "JSON report was not written"
    data = json.loads(json_path.read_text())
    return result.exit_code, data


def test_validator_ok(sample_changelog: Path, tmp_path: Path) -> None:
    exit_code, data = _run_validate(sample_changelog, tmp_path / "report.json")
    assert exit_code == 0
    assert data["ok"] is True
    assert data["issues"] == []
    assert data["summary"]["releases"] == 2
    assert data["summary"]["last_version"] == "1.1.0"
    assert data["summary"]["unreleased_entries"] == 2


def test_validator_detects_problems(broken_changelog: Path, tmp_path: Path) -> None:
    exit_code, data = _run_validate(broken_changelog, tmp_path / "broken.json")
    assert exit_code == 1
    assert data["ok"] is False
    codes = {issue["code"] for issue in data["issues"]}
    assert {
        "CATEGORY_EMPTY",
        "CATEGORY_UNKNOWN",
        "RELEASE_DATE_MISSING",
        "RELEASE_LINK_MISSING",
    } <= codes
    severities = {issue["severity"] for issue in data["issues"]}
    assert "error" in severities


def test_release_order_is_a_warning(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text(
        "## [Unreleased]\n\n"
        "## [1.0.0] - 2024-01-01\n- a\n\n"
        "## [1.1.0] - 2024-02-01\n- b\n\n"
        "[Unreleased]: u\n[1.0.0]: a\n[1.1.0]: b\n",
        encoding="utf-8",
    )
    report = validate_changelog(changelog)
    assert report.ok
    assert [(issue.code, issue.severity) for issue in report.issues] == [("RELEASE_ORDER", Severity.WARNING)]
    assert report.issues[0].path == "/1.1.0"


def test_duplicate_release_is_an_error(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text(
        "## [Unreleased]\n\n## [1.0.0] - 2024-01-01\n- a\n\n## [1.0.0] - 2024-01-01\n- b\n\n"
        "[Unreleased]: u\n[1.0.0]: a\n",
        encoding="utf-8",
    )
    report = validate_changelog(changelog)
    assert not report.ok
    assert "RELEASE_DUPLICATE" in {issue.code for issue in report.issues}


@pytest.mark.parametrize(
    "text",
    [
        "Just some notes.\n",
        "## [Unreleased]\n- a\n\n## [Unreleased]\n- b\n",
    ],
)
def test_malformed_document_is_reported(tmp_path: Path, text: str) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text(text, encoding="utf-8")
    report = validate_changelog(changelog)
    assert not report.ok
    assert [issue.code for issue in report.issues] == ["MALFORMED_DOCUMENT"]


def test_missing_unreleased_is_a_warning(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text("# Changelog\n\n## [1.0.0] - 2024-01-01\n- a\n", encoding="utf-8")
    report = validate_changelog(changelog)
    assert report.ok
    codes = {issue.code for issue in report.issues}
    assert codes == {"UNRELEASED_HEADING_MISSING", "UNRELEASED_LINK_MISSING", "RELEASE_LINK_MISSING"}
