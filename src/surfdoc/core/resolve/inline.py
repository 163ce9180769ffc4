"""Attribute accessors and inline conventions shared by block resolvers"""

import re
from enum import Enum
from typing import Optional, TypeVar

from surfdoc.core.blocks import Attrs, Span
from surfdoc.core.diagnostics import warn


E = TypeVar("E", bound=Enum)

_LINK_RE = re.compile(r'\[([^\]]*)\]\(([^)]*)\)')


# --- attribute accessors ---

def attr_string(attrs: Attrs, key: str) -> Optional[str]:
    """Return an attribute as text; numbers and bools are rendered, null is None."""
    value = attrs.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def attr_first(attrs: Attrs, *keys: str) -> Optional[str]:
    """Return the first present key among aliases."""
    for key in keys:
        value = attr_string(attrs, key)
        if value is not None:
            return value
    return None


def attr_bool(attrs: Attrs, key: str) -> bool:
    return attrs.get(key) is True


def attr_int(attrs: Attrs, key: str, span: Optional[Span] = None) -> Optional[int]:
    """Return a non-negative integer attribute; absent (with a warning) if not numeric."""
    raw = attr_string(attrs, key)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        warn(f"'{key}' expects a whole number, got {raw!r}", span, code="invalid-number")
        return None
    return value


def attr_enum(attrs: Attrs, key: str, enum: type[E], default: E, span: Optional[Span] = None) -> E:
    """Return an enum attribute, falling back to default with a warning on unknown values."""
    value = optional_enum(attrs, key, enum, span)
    return default if value is None else value


def optional_enum(attrs: Attrs, key: str, enum: type[E], span: Optional[Span] = None) -> Optional[E]:
    raw = attr_string(attrs, key)
    if raw is None:
        return None
    try:
        return enum(raw.lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum)
        warn(f"unknown {key} {raw!r}; expected one of: {choices}", span, code="unknown-value")
        return None


def split_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated attribute into trimmed parts."""
    if raw is None:
        return []
    return [part.strip() for part in raw.split(",")]


# --- tables ---

def is_table_separator(line: str) -> bool:
    """True when every cell of a pipe row consists only of '-' and ':'."""
    inner = line.strip().strip("|").strip()
    if not inner:
        return False
    return all(
        all(c in "-:" for c in cell.strip())
        for cell in inner.split("|")
    )


def split_row(line: str) -> list[str]:
    """Split a pipe row into trimmed cells, ignoring the outer pipes."""
    inner = line.strip()
    if inner.startswith("|"):
        inner = inner[1:]
    if inner.endswith("|"):
        inner = inner[:-1]
    return [cell.strip() for cell in inner.split("|")]


def parse_table(content: str) -> tuple[list[str], list[list[str]]]:
    """Parse pipe rows into (headers, rows); the first non-separator row is the header."""
    headers: list[str] = []
    rows: list[list[str]] = []
    for line in content.splitlines():
        if not line.strip() or is_table_separator(line):
            continue
        cells = split_row(line)
        if not headers:
            headers = cells
        else:
            rows.append(cells)
    return headers, rows


# --- links ---

def parse_link(text: str) -> Optional[tuple[str, str]]:
    """Return (label, href) when text starts with a Markdown link."""
    m = _LINK_RE.match(text.strip())
    if not m:
        return None
    return m.group(1), m.group(2)


def extract_quoted_attr(text: str, key: str) -> Optional[str]:
    """Find `key="value"` (or unquoted `key=value`) inside a curly suffix."""
    m = re.search(rf'(?:^|\s){re.escape(key)}="([^"]*)"', text)
    if m:
        return m.group(1)
    m = re.search(rf'(?:^|\s){re.escape(key)}=([^\s"}}]+)', text)
    return m.group(1) if m else None


def heading_text(line: str, *prefixes: str) -> Optional[str]:
    """Return heading text for the first matching prefix, else None."""
    for prefix in prefixes:
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    return None
