"""Directive scanner, leaf directive parser, and the recursive children scanner"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

from surfdoc.core.attrs import bracket_extent, parse_attrs
from surfdoc.core.blocks import Block, Markdown, Unknown
from surfdoc.core.diagnostics import nested, warn


logger = logging.getLogger(__name__)

_OPEN_RE = re.compile(r'(:{2,})([^\W\d_][\w-]*)(.*)')


class DirectiveOpen(NamedTuple):
    """An opening marker: colon-run depth, directive name, raw bracket text."""
    depth: int
    name: str
    attrs_text: str


@dataclass(frozen=True)
class Segment:
    """One unit of scanned text: a prose run, a directive, or an orphan closer."""
    kind: str                       # "markdown" | "container" | "leaf" | "orphan"
    start: int                      # first line index (inclusive)
    end: int                        # last line index (inclusive)
    text: str = ""                  # prose for markdown segments
    directive: Optional[Unknown] = None
    abandoned: bool = False         # leaf reinterpretation dropped scanned body lines


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping a trailing \\r from each line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def opening_directive(line: str) -> Optional[DirectiveOpen]:
    """Parse `::name[attrs]` (any depth >= 2) from a trimmed line, else None."""
    m = _OPEN_RE.fullmatch(line.strip())
    if not m:
        return None
    colons, name, rest = m.groups()
    if rest and not rest.startswith("["):
        return None
    return DirectiveOpen(len(colons), name, bracket_extent(rest))


def closing_directive_depth(line: str) -> Optional[int]:
    """Return the depth of a bare closer line (only colons, at least two), else None."""
    trimmed = line.strip()
    if len(trimmed) >= 2 and trimmed.strip(":") == "":
        return len(trimmed)
    return None


def _scan(lines: list[str], start: int, depth: int) -> tuple[list[str], Optional[int]]:
    content: list[str] = []
    nesting = 0
    for idx in range(start, len(lines)):
        line = lines[idx]
        closer = closing_directive_depth(line)
        if closer is not None:
            if nesting == 0 and closer == depth:
                return content, idx
            if nesting > 0:
                nesting -= 1
            content.append(line)
            continue

        opener = opening_directive(line)
        if opener is not None:
            if opener.depth > depth:
                nesting += 1
            elif opener.depth == depth and nesting == 0:
                return content, None
        content.append(line)
    return content, None


def scan_container_close(lines: list[str], start: int, depth: int) -> Optional[tuple[str, int]]:
    """Find the closer for a depth-`depth` container whose body starts at `start`.

    Returns (joined content, closer index), or None when no closer exists,
    including when a sibling opener of the same depth appears first.
    """
    content, end = _scan(lines, start, depth)
    if end is None:
        return None
    return "\n".join(content), end


def try_parse_leaf_directive(line: str) -> Optional[Unknown]:
    """Parse a bodiless top-level `::name[attrs]` line into an unresolved Unknown."""
    opener = opening_directive(line)
    if opener is None or opener.depth != 2:
        return None
    return Unknown(name=opener.name, attrs=parse_attrs(opener.attrs_text))


def trim_blank_lines(lines: list[str]) -> str:
    """Join lines after dropping leading and trailing blank ones."""
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


def iter_segments(lines: list[str]) -> Iterator[Segment]:
    """Split lines into prose runs and directives in source order.

    Orphan closers are yielded as their own segments and do not break the
    surrounding prose run.
    """
    prose: list[tuple[int, str]] = []

    def flush() -> Iterator[Segment]:
        text_lines = [line for _, line in prose]
        text = trim_blank_lines(text_lines)
        if text:
            used = [i for i, line in prose if line.strip()]
            yield Segment("markdown", used[0], used[-1], text=text)
        prose.clear()

    i = 0
    while i < len(lines):
        line = lines[i]
        opener = opening_directive(line)
        if opener is not None:
            body, end = _scan(lines, i + 1, opener.depth)
            if end is not None:
                yield from flush()
                directive = Unknown(
                    name=opener.name,
                    attrs=parse_attrs(opener.attrs_text),
                    content="\n".join(body),
                )
                logger.debug("container %r at line %d..%d", opener.name, i, end)
                yield Segment("container", i, end, directive=directive)
                i = end + 1
                continue

            leaf = try_parse_leaf_directive(line)
            if leaf is not None:
                yield from flush()
                abandoned = any(b.strip() for b in body)
                yield Segment("leaf", i, i, directive=leaf, abandoned=abandoned)
                i += 1
                continue

        if closing_directive_depth(line) is not None:
            yield Segment("orphan", i, i)
            i += 1
            continue

        prose.append((i, line))
        i += 1

    yield from flush()


def parse_children(content: str) -> list[Block]:
    """Scan container content into interleaved Markdown and resolved nested blocks."""
    from surfdoc.core.resolve.registry import resolve_block

    children: list[Block] = []
    with nested() as within_limit:
        limit_reported = False
        for seg in iter_segments(split_lines(content)):
            if seg.kind == "markdown":
                children.append(Markdown(content=seg.text))
            elif seg.kind in ("container", "leaf"):
                if within_limit:
                    children.append(resolve_block(seg.directive))
                    continue
                if not limit_reported:
                    warn(
                        f"nesting limit reached; '{seg.directive.name}' left unresolved",
                        code="nesting-limit",
                    )
                    limit_reported = True
                children.append(seg.directive)
    return children
