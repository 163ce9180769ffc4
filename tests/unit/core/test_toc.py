"""Unit tests for core/toc.py and core/utils/tokens.py"""

from surfdoc.core.blocks import Hero, Markdown, Page, Section, Toc
from surfdoc.core.toc import build_entries, collect_headings, fill_toc
from surfdoc.core.utils.tokens import heading_level, iter_headings


def test_iter_headings_plain_text(md):
    tokens = md.parse("# Hello `code`\n\nPara\n\n### *Third*\n")
    assert list(iter_headings(tokens)) == [(1, "Hello code"), (3, "Third")]


def test_heading_level_ignores_other_tokens(md):
    tokens = md.parse("## Two\n\ntext\n")
    assert [heading_level(t) for t in tokens if heading_level(t)] == [2]


def test_collect_headings_document_order():
    blocks = [
        Hero(headline="Welcome"),
        Markdown(content="# Intro\n\ntext\n\n## Details"),
        Section(headline="Why", children=[Markdown(content="### Reason")]),
        Page(route="/", children=[Markdown(content="## Page heading")]),
    ]
    assert collect_headings(blocks) == [
        (1, "Welcome"), (1, "Intro"), (2, "Details"), (2, "Why"), (3, "Reason"), (2, "Page heading"),
    ]


def test_collect_headings_skips_code_fences():
    blocks = [Markdown(content="```\n# not a heading\n```\n# Real")]
    assert collect_headings(blocks) == [(1, "Real")]


def test_build_entries_depth_and_unique_ids():
    headings = [(1, "Intro"), (2, "Intro"), (3, "Deep"), (2, "Intro"), (2, "!!!")]
    entries = build_entries(headings, depth=2)
    assert [(e.level, e.id) for e in entries] == [(1, "intro"), (2, "intro-1"), (2, "intro-2"), (2, "section")]


def test_fill_toc_populates_entries():
    blocks = [Toc(depth=1), Markdown(content="# A\n## B")]
    filled = fill_toc(blocks)
    assert [e.text for e in filled[0].entries] == ["A"]
    assert filled[1] is blocks[1]


def test_fill_toc_without_toc_is_identity():
    blocks = [Markdown(content="# A")]
    assert fill_toc(blocks) is blocks


def test_fill_toc_reaches_nested_toc():
    blocks = [
        Markdown(content="# Intro"),
        Page(route="/", children=[Toc(depth=2), Markdown(content="## Part")]),
        Section(children=[Markdown(content="### Deep")]),
    ]
    filled = fill_toc(blocks)
    assert [e.text for e in filled[1].children[0].entries] == ["Intro", "Part"]
    assert filled[0] is blocks[0]
    assert filled[2] is blocks[2]
