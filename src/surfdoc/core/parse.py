"""Front-matter splitting, top-level directive scanning, and file discovery"""

import logging
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from surfdoc.core.blocks import Block, Markdown, Span
from surfdoc.core.diagnostics import DEFAULT_MAX_DEPTH, collecting, report, warn
from surfdoc.core.models import (
    Confidence, DocStatus, DocType, FrontMatter, ParseResult, RelatedDoc, Relationship,
    Scope, Severity, SurfDoc,
)
from surfdoc.core.resolve.registry import ATTR_ONLY_BLOCKS, BLOCK_PARSERS, resolve_block
from surfdoc.core.scan import Segment, iter_segments, split_lines
from surfdoc.core.toc import fill_toc


logger = logging.getLogger(__name__)

SURF_EXTENSIONS = {'.surf', '.md'}

FRONT_MATTER_ENUMS: dict[str, tuple[str, type[Enum]]] = {
    "type":       ("doc_type", DocType),
    "status":     ("status", DocStatus),
    "scope":      ("scope", Scope),
    "confidence": ("confidence", Confidence),
}
FRONT_MATTER_TEXT = ("title", "created", "updated", "author", "description", "workspace", "decision")
FRONT_MATTER_LISTS = ("tags", "contributors")


# --- front matter ---

def _text(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _related(raw: Any) -> list[RelatedDoc]:
    related = []
    for entry in raw if isinstance(raw, list) else [raw]:
        if not isinstance(entry, dict) or "path" not in entry:
            warn(f"front matter 'related' entry {entry!r} needs a path", code="invalid-value")
            continue
        rel = entry.get("relationship", Relationship.references.value)
        try:
            relationship = Relationship(str(rel))
        except ValueError:
            warn(f"unknown relationship {rel!r}", code="unknown-value")
            relationship = Relationship.references
        related.append(RelatedDoc(path=str(entry["path"]), relationship=relationship))
    return related


def build_front_matter(data: dict[str, Any]) -> FrontMatter:
    """Map raw YAML keys onto FrontMatter; unknown keys go to extra, bad values are dropped."""
    fields: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        key = str(key)
        if value is None:
            continue
        if key in FRONT_MATTER_ENUMS:
            field, enum = FRONT_MATTER_ENUMS[key]
            try:
                fields[field] = enum(str(value))
            except ValueError:
                choices = ", ".join(m.value for m in enum)
                warn(f"unknown front matter {key} {value!r}; expected one of: {choices}", code="unknown-value")
        elif key in FRONT_MATTER_TEXT:
            fields[key] = _text(value)
        elif key in FRONT_MATTER_LISTS:
            items = value if isinstance(value, list) else [value]
            fields[key] = [_text(v) for v in items]
        elif key == "version":
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                fields["version"] = value
            else:
                warn(f"front matter version expects a whole number, got {value!r}", code="invalid-number")
        elif key == "related":
            fields["related"] = _related(value)
        else:
            extra[key] = value
    return FrontMatter(**fields, extra=extra)


def split_front_matter(text: str) -> tuple[Optional[FrontMatter], int]:
    """Return (front matter, index of the first body line) for a document.

    Problems are reported as diagnostics; the body always starts somewhere.
    """
    lines = split_lines(text)
    if not lines or lines[0].strip() != "---":
        return None, 0

    close = next((i for i in range(1, len(lines)) if lines[i].strip() == "---"), None)
    if close is None:
        report(
            Severity.error, "front matter is missing its closing '---'",
            Span(start_line=1, end_line=1, end_offset=len(lines[0].encode())),
            code="frontmatter-unterminated",
        )
        return None, 1

    span = Span(start_line=1, end_line=close + 1, end_offset=_line_offsets(text)[close + 1] - 1)
    try:
        data = yaml.safe_load("\n".join(lines[1:close])) or {}
    except yaml.YAMLError as e:
        report(Severity.error, f"invalid YAML front matter: {e}", span, code="frontmatter-invalid")
        return None, close + 1
    if not isinstance(data, dict):
        report(
            Severity.error, f"front matter must be a mapping, got {type(data).__name__}",
            span, code="frontmatter-invalid",
        )
        return None, close + 1
    return build_front_matter(data), close + 1


# --- body ---

def _line_offsets(text: str) -> list[int]:
    """UTF-8 byte offset of the start of each raw line, plus one past the end."""
    offsets = [0]
    for line in text.split("\n"):
        offsets.append(offsets[-1] + len(line.encode()) + 1)
    return offsets


def _span(seg: Segment, offsets: list[int], base: int) -> Span:
    start, end = seg.start + base, seg.end + base
    return Span(
        start_line=start + 1,
        end_line=end + 1,
        start_offset=offsets[start],
        end_offset=offsets[end + 1] - 1,
    )


def _top_level_blocks(text: str, base: int) -> list[Block]:
    lines = split_lines(text)
    offsets = _line_offsets(text)
    blocks: list[Block] = []
    for seg in iter_segments(lines[base:]):
        span = _span(seg, offsets, base)
        if seg.kind == "markdown":
            blocks.append(Markdown(content=seg.text, span=span))
        elif seg.kind == "orphan":
            report(Severity.info, "closing marker without an opening directive ignored", span, code="orphan-closer")
        else:
            name = seg.directive.name
            if seg.kind == "leaf" and name in BLOCK_PARSERS and name not in ATTR_ONLY_BLOCKS:
                lost = "; its following lines are read as prose" if seg.abandoned else ""
                warn(f"'{name}' directive has no closing marker{lost}", span, code="unclosed-directive")
            logger.debug("resolving %r at line %d", name, span.start_line)
            blocks.append(resolve_block(seg.directive.model_copy(update={"span": span})))
    return blocks


def parse(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ParseResult:
    """Parse SurfDoc source into a document plus diagnostics; never raises on content."""
    with collecting(max_depth=max_depth) as diagnostics:
        front_matter, body_start = split_front_matter(text)
        blocks = fill_toc(_top_level_blocks(text, body_start))
    doc = SurfDoc(front_matter=front_matter, blocks=blocks, source=text)
    return ParseResult(doc=doc, diagnostics=diagnostics)


def discover_files(path: Path) -> list[Path]:
    """Return sorted .surf/.md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in SURF_EXTENSIONS else []
    files = sorted(p for p in path.rglob('*') if p.suffix in SURF_EXTENSIONS)
    logger.debug("discovered %d file(s) under %s", len(files), path)
    return files


def parse_file(path: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> ParseResult:
    """Read and parse a single SurfDoc file."""
    result = parse(path.read_text(encoding='utf-8'), max_depth=max_depth)
    logger.info("parsed %s: %d block(s), %d diagnostic(s)", path, len(result.doc.blocks), len(result.diagnostics))
    return result
