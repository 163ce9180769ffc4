"""Directive attribute grammar: `[flag key=value key="quoted value"]`"""

import re

from surfdoc.core.blocks import Attrs, AttrValue


_KEY_RE = re.compile(r'[A-Za-z_][\w.-]*')
_INT_RE = re.compile(r'-?\d+')
_FLOAT_RE = re.compile(r'-?\d+\.\d+')
_BARE_SAFE_RE = re.compile(r'[^\s"\[\]\\]+')


class AttrSyntaxError(ValueError):
    """Raised internally for malformed attribute text."""


def coerce_scalar(raw: str) -> AttrValue:
    """Interpret an unquoted value as bool, null, int, float, or string by shape."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw == "null":
        return None
    if _INT_RE.fullmatch(raw):
        return int(raw)
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    return raw


def _read_quoted(text: str, i: int) -> tuple[str, int]:
    """Read a quoted value starting just past the opening quote; return (value, index after close)."""
    buf = []
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text) and text[i + 1] in '"\\':
            buf.append(text[i + 1])
            i += 2
            continue
        if c == '"':
            return "".join(buf), i + 1
        buf.append(c)
        i += 1
    raise AttrSyntaxError("unterminated quoted value")


def _tokenize(text: str) -> list[tuple[str, AttrValue]]:
    pairs: list[tuple[str, AttrValue]] = []
    i, n = 0, len(text)
    while i < n:
        if text[i].isspace():
            i += 1
            continue

        start = i
        while i < n and not text[i].isspace() and text[i] != "=":
            i += 1
        key = text[start:i]
        if not _KEY_RE.fullmatch(key):
            raise AttrSyntaxError(f"invalid attribute name {key!r}")

        if i >= n or text[i] != "=":
            pairs.append((key, True))
            continue

        i += 1
        if i < n and text[i] == '"':
            value, i = _read_quoted(text, i + 1)
            if i < n and not text[i].isspace():
                raise AttrSyntaxError(f"unexpected text after quoted value for {key!r}")
            pairs.append((key, value))
        else:
            start = i
            while i < n and not text[i].isspace():
                i += 1
            pairs.append((key, coerce_scalar(text[start:i])))
    return pairs


def parse_attrs(text: str) -> Attrs:
    """Parse attribute text (with or without brackets) into a key-sorted dict; {} if malformed."""
    s = text.strip()
    if s.startswith("["):
        if not s.endswith("]"):
            return {}
        s = s[1:-1]
    if not s.strip():
        return {}
    try:
        pairs = _tokenize(s)
    except AttrSyntaxError:
        return {}
    return dict(sorted(dict(pairs).items()))


def bracket_extent(rest: str) -> str:
    """Return the leading `[...]` of rest, honouring quotes; all of rest if unclosed, '' if none."""
    if not rest.startswith("["):
        return ""
    in_quote = False
    i = 1
    while i < len(rest):
        c = rest[i]
        if in_quote and c == "\\":
            i += 2
            continue
        if c == '"':
            in_quote = not in_quote
        elif c == "]" and not in_quote:
            return rest[:i + 1]
        i += 1
    return rest


# --- rendering ---

def escape_attr(value: str) -> str:
    """Escape backslashes and double quotes for a quoted attribute value.

    Directive openers are single lines, so a value holding a line break is rejected.
    """
    if "\n" in value or "\r" in value:
        raise ValueError(f"attribute value cannot contain a line break: {value!r}")
    return value.replace("\\", "\\\\").replace('"', '\\"')


def quoted(key: str, value: str) -> str:
    return f'{key}="{escape_attr(value)}"'


def format_value(key: str, value: AttrValue) -> str:
    """Render one attribute so that parse_attrs reads back the same typed value."""
    if value is True:
        return key
    if value is False:
        return f"{key}=false"
    if value is None:
        return f"{key}=null"
    if isinstance(value, (int, float)):
        return f"{key}={value!r}"
    if _BARE_SAFE_RE.fullmatch(value) and coerce_scalar(value) == value:
        return f"{key}={value}"
    return quoted(key, value)


def format_attrs(parts: list[str]) -> str:
    """Join rendered attribute parts into a bracket suffix; '' when there are none."""
    return f"[{' '.join(parts)}]" if parts else ""
