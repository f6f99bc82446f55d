"""CLI entrypoint for changelogger."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape

from changelogger import __version__, api
from changelogger.config import ChangelogConfig, LinkPattern, load_config
from changelogger.core.model import ChangeCategory
from changelogger.edit.release import LinkMode
from changelogger.errors import ChangelogError, SourceNotFoundError
from changelogger.render.serializer import OutputFormat
from changelogger.validate import Severity

console = Console()
app = typer.Typer(help="Maintain Keep a Changelog files: add entries, cut releases, convert formats.")

LOG = logging.getLogger("changelogger")
LOG_JSON = False
DEFAULT_CHANGELOG = Path("CHANGELOG.md")

_config_path: Optional[Path] = None


def _configure_logging(verbosity: int, json_logs: bool) -> None:
    global LOG_JSON
    LOG_JSON = json_logs
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s")


def _log(event: str, **payload: object) -> None:
    if LOG_JSON:
        record = {"event": event, **payload}
        console.print_json(data=record, default=str)
    else:
        details = " ".join(f"{key}={value}" for key, value in payload.items())
        console.log(escape(f"{event} {details}" if details else event))


def _load_config() -> ChangelogConfig:
    try:
        return load_config(_config_path)
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Unable to load configuration:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


@contextmanager
def _reporting_errors(config: ChangelogConfig) -> Iterator[None]:
    """Translate changelog errors into a message and an exit code."""
    try:
        yield
    except SourceNotFoundError as exc:
        _log("changelog.error", kind=type(exc).__name__)
        console.print(f"[bold red]{escape(config.message(exc.message_id, **exc.params))}[/bold red]")
        raise typer.Exit(code=2) from exc
    except ChangelogError as exc:
        _log("changelog.error", kind=type(exc).__name__)
        console.print(f"[bold red]{escape(config.message(exc.message_id, **exc.params))}[/bold red]")
        raise typer.Exit(code=1) from exc
    except FileExistsError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        console.print(f"[bold red]Invalid argument:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _version_callback(value: bool) -> None:
    """Print the package version and exit when requested."""
    if value:
        console.print(f"changelogger [bold cyan]{__version__}[/bold cyan]")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the changelogger version and exit.",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file (default: ./.changelogger.yaml)."
    ),
    verbose: int = typer.Option(0, "--verbose", "-V", count=True, help="Increase log verbosity (repeatable)."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit JSON structured logs."),
) -> None:
    """Initialize the CLI before command dispatch."""
    global _config_path
    _config_path = config
    _configure_logging(verbose, log_json)


@app.command()
def init(
    path: Path = typer.Argument(DEFAULT_CHANGELOG, help="Changelog file to create."),
    no_semver: bool = typer.Option(False, "--no-semver", help="Omit the Semantic Versioning statement."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Create a blank changelog with an empty Unreleased section."""
    cfg = _load_config()
    with _reporting_errors(cfg):
        target = api.create_blank(path, include_semver_statement=not no_semver, config=cfg, force=force)
    _log("changelog.created", path=target)
    console.print(f"[bold green]{escape(cfg.message('blank-created', path=str(target)))}[/bold green]")


@app.command()
def add(
    category: ChangeCategory = typer.Argument(..., case_sensitive=False, help="Change type of the entry."),
    entry: str = typer.Argument(..., help="Entry text, without the leading '- '."),
    file: Path = typer.Option(DEFAULT_CHANGELOG, "--file", "-f", help="Changelog to read."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output path (default: overwrite --file)."),
) -> None:
    """Add an entry to the Unreleased section."""
    cfg = _load_config()
    with _reporting_errors(cfg):
        result = api.insert_entry(file, out or file, category, entry, config=cfg)
    _log("entry.added", category=result.category.value, path=result.output_path)
    message = cfg.message("entry-added", category=result.category.value, path=str(result.output_path))
    console.print(f"[bold green]{escape(message)}[/bold green]")


def _link_pattern(
    first_release: Optional[str],
    normal_release: Optional[str],
    unreleased: Optional[str],
) -> Optional[LinkPattern]:
    if first_release is None and normal_release is None and unreleased is None:
        return None
    if unreleased is None:
        raise typer.BadParameter("--unreleased-link is required when link templates are given on the command line.")
    return LinkPattern(first_release=first_release, normal_release=normal_release, unreleased=unreleased)


@app.command()
def release(
    version: str = typer.Argument(..., help="Version of the new release, e.g. 1.2.0."),
    file: Path = typer.Option(DEFAULT_CHANGELOG, "--file", "-f", help="Changelog to read."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output path (default: overwrite --file)."),
    links: LinkMode = typer.Option(
        LinkMode.NONE, "--links", "-l", case_sensitive=False, help="Footer link generation: automatic, manual, none."
    ),
    first_release_link: Optional[str] = typer.Option(None, help="Template for the first release link ({CUR})."),
    normal_release_link: Optional[str] = typer.Option(None, help="Template for later release links ({PREV}, {CUR})."),
    unreleased_link: Optional[str] = typer.Option(None, help="Template for the Unreleased link ({CUR})."),
) -> None:
    """Promote the Unreleased section to a dated release."""
    cfg = _load_config()
    pattern = _link_pattern(first_release_link, normal_release_link, unreleased_link)
    with _reporting_errors(cfg):
        result = api.promote_release(file, out or file, version, links, pattern, config=cfg)
    _log(
        "release.created",
        version=result.version,
        date=result.date.isoformat(),
        previous=result.previous_version,
        links=result.link_mode.value,
    )
    for notice in result.notices:
        console.print(f"[yellow]{escape(notice)}[/yellow]")
    message = cfg.message(
        "release-created", version=result.version, date=result.date.isoformat(), path=str(result.output_path)
    )
    console.print(f"[bold green]{escape(message)}[/bold green]")


@app.command()
def convert(
    file: Path = typer.Option(DEFAULT_CHANGELOG, "--file", "-f", help="Changelog to read."),
    out: Path = typer.Option(..., "--out", "-o", help="Output path."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.FULL,
        "--format",
        case_sensitive=False,
        help="Output profile: full, release-only, text, text-release-only.",
    ),
    no_header: bool = typer.Option(False, "--no-header", help="Leave out the header block."),
) -> None:
    """Render the changelog in another output profile."""
    cfg = _load_config()
    with _reporting_errors(cfg):
        target = api.convert(file, out, output_format, include_header=not no_header, config=cfg)
    _log("convert.completed", output=target, format=output_format.value)
    message = cfg.message("converted", format=output_format.value, path=str(target))
    console.print(f"[bold green]{escape(message)}[/bold green]")


@app.command()
def notes(
    version: str = typer.Argument(..., help="Release version to print."),
    file: Path = typer.Option(DEFAULT_CHANGELOG, "--file", "-f", help="Changelog to read."),
    text: bool = typer.Option(False, "--text", help="Strip Markdown heading markers."),
) -> None:
    """Print the notes of one release to stdout."""
    cfg = _load_config()
    with _reporting_errors(cfg):
        body = api.release_notes(file, version, plain_text=text)
    typer.echo(body)


@app.command()
def validate(
    file: Path = typer.Option(DEFAULT_CHANGELOG, "--file", "-f", help="Changelog to check."),
    json_report: Optional[Path] = typer.Option(None, "--json", help="Write machine-readable report to a JSON file."),
) -> None:
    """Check the changelog structure and emit a report."""
    cfg = _load_config()
    with _reporting_errors(cfg):
        report = api.validate(file)

    if json_report is not None:
        json_report.parent.mkdir(parents=True, exist_ok=True)
        json_report.write_text(report.model_dump_json(indent=2))

    severity_style = {
        Severity.INFO: "cyan",
        Severity.WARNING: "yellow",
        Severity.ERROR: "red",
    }

    if report.issues:
        console.print("[bold]Validation Issues:[/bold]")
        for issue in report.issues:
            style = severity_style.get(issue.severity, "white")
            console.print(
                escape(f"{issue.severity.value.upper()} {issue.code}: {issue.message} ({issue.path})"),
                style=style,
            )
    else:
        console.print("[bold green]No issues detected.[/bold green]")

    summary_parts = ", ".join(f"{key}={value}" for key, value in report.summary.items())
    console.print(f"[bold cyan]Summary:[/bold cyan] {escape(summary_parts)}")

    if report.ok:
        console.print("[bold green]Validation passed.[/bold green]")
        raise typer.Exit(code=0)

    console.print("[bold red]Validation completed with errors.[/bold red]")
    raise typer.Exit(code=1)
