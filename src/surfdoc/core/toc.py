"""Table-of-contents collection from document headings"""

from typing import Optional

from markdown_it import MarkdownIt

from surfdoc.core.blocks import Block, Hero, Markdown, Page, Section, Toc, TocEntry
from surfdoc.core.utils.slug import unique_slug
from surfdoc.core.utils.tokens import iter_headings


def collect_headings(blocks: list[Block], md: Optional[MarkdownIt] = None) -> list[tuple[int, str]]:
    """Return (level, text) for every heading in document order, descending into page children."""
    md = md or MarkdownIt("commonmark")
    headings: list[tuple[int, str]] = []
    for block in blocks:
        if isinstance(block, Markdown):
            headings.extend(iter_headings(md.parse(block.content)))
        elif isinstance(block, Hero) and block.headline:
            headings.append((1, block.headline))
        elif isinstance(block, Section):
            if block.headline:
                headings.append((2, block.headline))
            headings.extend(collect_headings(block.children, md))
        elif isinstance(block, Page):
            headings.extend(collect_headings(block.children, md))
    return headings


def build_entries(headings: list[tuple[int, str]], depth: int) -> list[TocEntry]:
    """Turn headings up to depth into entries with unique anchor ids."""
    seen: dict[str, int] = {}
    return [
        TocEntry(level=level, text=text, id=unique_slug(text, seen))
        for level, text in headings
        if text and level <= depth
    ]


def _has_toc(blocks: list[Block]) -> bool:
    return any(
        isinstance(b, Toc) or (isinstance(b, (Page, Section)) and _has_toc(b.children))
        for b in blocks
    )


def _with_entries(blocks: list[Block], headings: list[tuple[int, str]]) -> list[Block]:
    filled: list[Block] = []
    for b in blocks:
        if isinstance(b, Toc):
            b = b.model_copy(update={"entries": build_entries(headings, b.depth)})
        elif isinstance(b, (Page, Section)) and _has_toc(b.children):
            b = b.model_copy(update={"children": _with_entries(b.children, headings)})
        filled.append(b)
    return filled


def fill_toc(blocks: list[Block]) -> list[Block]:
    """Return blocks with every Toc, nested ones included, populated from the document's headings."""
    if not _has_toc(blocks):
        return blocks
    return _with_entries(blocks, collect_headings(blocks))
