"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from surfdoc.config import Settings, load_config
from surfdoc.core.models import Diagnostic, ParseResult, Severity
from surfdoc.core.parse import discover_files, parse_file
from surfdoc.core.resolve.registry import ATTR_ONLY_BLOCKS, BLOCK_PARSERS
from surfdoc.core.utils.diff import diff_summary, unified_diff


logger = logging.getLogger(__name__)


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _files(path: str) -> list[Path]:
    """Resolve a CLI path argument to the SurfDoc files under it."""
    target = Path(path)
    if not target.exists():
        _fail(f"Path not found: {path}")
    files = discover_files(target)
    if not files:
        _fail(f"No .surf or .md files found under {path}")
    return files


def _parse(path: Path, max_depth: int) -> ParseResult:
    try:
        return parse_file(path, max_depth=max_depth)
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)


def _format_diagnostic(path: Path, d: Diagnostic) -> str:
    """Render one diagnostic as `path:line: severity: message [code]`."""
    where = f"{path}:{d.span.start_line}" if d.span and not d.span.is_synthetic else str(path)
    code = f" [{d.code}]" if d.code else ""
    return f"{where}: {d.severity.value}: {d.message}{code}"


def root_cmd(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ):
    """SurfDoc parser, checker, and formatter."""
    settings = _settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to parse")],
    indent: Annotated[Optional[int], typer.Option("--indent", help="JSON indent width")] = None,
    max_depth: Annotated[Optional[int], typer.Option("--max-depth", help="Max directive nesting to resolve")] = None,
    ):
    """Print the parsed block tree and diagnostics as JSON."""
    settings = _settings(overrides={"json_indent": indent, "max_depth": max_depth})
    target = Path(path)
    output = []
    for file in _files(path):
        result = _parse(file, settings.max_depth)
        data = result.model_dump(mode="json", exclude={"doc": {"source"}})
        output.append({"path": str(file), **data})
    payload = output[0] if target.is_file() else output
    typer.echo(json.dumps(payload, indent=settings.json_indent, ensure_ascii=False))


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to check")],
    fail_on: Annotated[Optional[str], typer.Option("--fail-on", help="Lowest severity that fails: error, warning or info")] = None,
    max_depth: Annotated[Optional[int], typer.Option("--max-depth", help="Max directive nesting to resolve")] = None,
    ):
    """Report parse diagnostics; exit 1 when any reaches the --fail-on severity."""
    settings = _settings(overrides={"fail_on": fail_on, "max_depth": max_depth})
    threshold = Severity(settings.fail_on)
    files = _files(path)

    counts = {s: 0 for s in Severity}
    failing = 0
    for file in files:
        result = _parse(file, settings.max_depth)
        for d in result.diagnostics:
            counts[d.severity] += 1
            typer.echo(_format_diagnostic(file, d))
        failing += len(result.at_least(threshold))

    typer.echo(
        f"Checked {len(files)} file(s) - "
        f"{counts[Severity.error]} error(s), "
        f"{counts[Severity.warning]} warning(s), "
        f"{counts[Severity.info]} info"
    )
    if failing:
        raise typer.Exit(1)


def fmt_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to format")],
    check: Annotated[bool, typer.Option("--check", help="Show a diff and exit 1 if any file is not canonical")] = False,
    write: Annotated[bool, typer.Option("--write", help="Rewrite files in place")] = False,
    ):
    """Print, check, or write the canonical serialization of SurfDoc files."""
    if check and write:
        _fail("--check and --write cannot be combined")
    settings = _settings()

    changed = 0
    for file in _files(path):
        result = _parse(file, settings.max_depth)
        original, formatted = result.doc.source, result.doc.to_surf_source()
        if not (check or write):
            typer.echo(formatted, nl=False)
            continue
        if original == formatted:
            continue
        changed += 1
        if check:
            typer.echo(unified_diff(original, formatted, str(file)), nl=False)
            summary = diff_summary(original, formatted)
            typer.echo(f"  {file}: +{summary['added']} -{summary['deleted']}")
        else:
            try:
                file.write_text(formatted, encoding="utf-8")
            except OSError as e:
                _fail(f"Cannot write {file}", e)
            logger.info("formatted %s", file)
            typer.echo(f"  formatted: {file}")

    if check:
        typer.echo(f"{changed} file(s) would be reformatted")
        if changed:
            raise typer.Exit(1)
    elif write:
        typer.echo(f"Formatted {changed} file(s)")


def types_cmd():
    """List the registered directive names."""
    for name in sorted(BLOCK_PARSERS):
        suffix = "  (attributes only)" if name in ATTR_ONLY_BLOCKS else ""
        typer.echo(f"{name}{suffix}")
