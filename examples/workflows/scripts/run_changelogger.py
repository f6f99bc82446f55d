#!/usr/bin/env python3
"""Invoke changelogger releases and conversions from CI workflow engines."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from changelogger import api
from changelogger.config import LinkPattern, load_config
from changelogger.edit.release import LinkMode
from changelogger.errors import ChangelogError
from changelogger.render.serializer import OutputFormat


def _link_pattern(args: argparse.Namespace) -> Optional[LinkPattern]:
    if args.unreleased_link is None:
        if args.first_release_link or args.normal_release_link:
            raise SystemExit("'--unreleased-link' is required when link templates are given.")
        return None
    return LinkPattern(
        first_release=args.first_release_link,
        normal_release=args.normal_release_link,
        unreleased=args.unreleased_link,
    )


def _release(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    result = api.promote_release(
        args.changelog,
        args.output or args.changelog,
        args.version,
        link_mode=args.links,
        link_pattern=_link_pattern(args),
        config=config,
    )
    summary = {
        "version": result.version,
        "date": result.date.isoformat(),
        "previous_version": result.previous_version,
        "links": result.link_mode.value,
        "output_path": str(result.output_path),
        "notices": result.notices,
    }
    if args.notes_path:
        notes = api.release_notes(result.output_path, result.version)
        Path(args.notes_path).write_text(notes + "\n", encoding="utf-8")
        summary["notes_path"] = str(args.notes_path)
    if args.emit_json:
        print(json.dumps(summary))


def _convert(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    target = api.convert(
        args.changelog,
        args.output,
        output_format=args.format,
        include_header=not args.no_header,
        config=config,
    )
    if args.emit_json:
        print(json.dumps({"format": args.format, "output_path": str(target)}))


def _validate(args: argparse.Namespace) -> None:
    report = api.validate(args.changelog)
    if args.emit_json:
        print(report.model_dump_json(indent=2))
    if not report.ok:
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, help="YAML configuration file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    release = subparsers.add_parser("release", help="Promote Unreleased to a new release.")
    release.add_argument("version", help="Version of the new release.")
    release.add_argument("--changelog", type=Path, default=Path("CHANGELOG.md"), help="Changelog to update.")
    release.add_argument("--output", type=Path, help="Output path (default: overwrite the changelog).")
    release.add_argument(
        "--links",
        default=LinkMode.NONE.value,
        choices=[mode.value for mode in LinkMode],
        help="Footer link generation mode.",
    )
    release.add_argument("--first-release-link", help="Template for the first release link.")
    release.add_argument("--normal-release-link", help="Template for subsequent release links.")
    release.add_argument("--unreleased-link", help="Template for the Unreleased link.")
    release.add_argument("--notes-path", help="Write the new release notes to this path.")
    release.add_argument("--emit-json", action="store_true", help="Emit a machine-readable release summary.")
    release.set_defaults(func=_release)

    convert = subparsers.add_parser("convert", help="Render the changelog in another profile.")
    convert.add_argument("output", type=Path, help="Destination path.")
    convert.add_argument("--changelog", type=Path, default=Path("CHANGELOG.md"), help="Changelog to read.")
    convert.add_argument(
        "--format",
        default=OutputFormat.FULL.value,
        choices=[fmt.value for fmt in OutputFormat],
        help="Output profile.",
    )
    convert.add_argument("--no-header", action="store_true", help="Leave out the header block.")
    convert.add_argument("--emit-json", action="store_true", help="Emit a machine-readable summary.")
    convert.set_defaults(func=_convert)

    validate = subparsers.add_parser("validate", help="Validate the changelog structure.")
    validate.add_argument("--changelog", type=Path, default=Path("CHANGELOG.md"), help="Changelog to check.")
    validate.add_argument("--emit-json", action="store_true", help="Emit the validation report as JSON.")
    validate.set_defaults(func=_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ChangelogError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
