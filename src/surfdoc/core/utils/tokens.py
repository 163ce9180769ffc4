"""markdown-it token helpers"""

from typing import Iterator


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def iter_headings(tokens: list) -> Iterator[tuple[int, str]]:
    """Yield (level, plain text) for each heading; the inline token follows heading_open."""
    for i, token in enumerate(tokens):
        level = heading_level(token)
        if level is None or i + 1 >= len(tokens):
            continue
        inline = tokens[i + 1]
        text = "".join(
            child.content for child in (inline.children or [])
            if child.type in ("text", "code_inline")
        ) or inline.content
        yield level, text.strip()
